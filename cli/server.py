#!/usr/bin/env python3
"""CLI for running the rules registry API server."""

import argparse
import os
import sys

from rulesregistry.config import ENV_DATA_DIR, ENV_LOG_LEVEL


def main():
    parser = argparse.ArgumentParser(description="Serve the rules registry over HTTP")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("-p", "--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--data-dir", help="Directory of rule sources (default: from config)")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Server and registry log level (default: info)"
    )
    parser.add_argument("--reload", action="store_true", help="Restart the server when code changes")

    args = parser.parse_args()

    # The app builds its registry at startup from config; pass overrides through the environment
    if args.data_dir:
        os.environ[ENV_DATA_DIR] = os.path.abspath(args.data_dir)
    os.environ[ENV_LOG_LEVEL] = args.log_level.upper()

    try:
        import uvicorn
        uvicorn.run(
            "rulesregistry.web.app:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level=args.log_level,
        )
    except KeyboardInterrupt:
        print("\nServer stopped", file=sys.stderr)
        sys.exit(0)


if __name__ == "__main__":
    main()
