#!/usr/bin/env python3
"""Main entry point for the AI Debate Arena."""

import logging
import os
import sys

from config.settings import get_default_config
from web.api import create_app


def setup_logging(level: str = "INFO"):
    """Configure logging for the web server."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    # Suppress noisy third-party loggers
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def print_usage():
    """Print usage information for local development."""

    print("AI Debate Arena")
    print("=" * 40)
    print("Usage:")
    print("   python main.py            start the web server")
    print("   python main.py --help     show this message")
    print()
    print("Environment:")
    print("   PORT            port to listen on (default 8000)")
    print("   DEBATE_CONFIG   config file path (default debate_config.json)")
    print("   ALLOWED_ORIGINS comma separated CORS origins")
    print()


def start_web_server():
    """Start the FastAPI web server."""
    config = get_default_config()
    setup_logging(config.system.log_level)

    import uvicorn

    port = int(os.environ.get("PORT", 8000))

    print("🎭 Starting AI Debate Arena Web Server...")
    print(f"📡 API Documentation: http://localhost:{port}/docs")
    print(f"🔌 WebSocket: ws://localhost:{port}/ws and ws://localhost:{port}/ws/debate/{{id}}")

    uvicorn.run(create_app(config), host="0.0.0.0", port=port, log_level="info", access_log=True)


def main():
    """Main entry point."""
    if "--help" in sys.argv or "-h" in sys.argv:
        print_usage()
        return

    start_web_server()


if __name__ == "__main__":
    main()
