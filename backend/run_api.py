#!/usr/bin/env python
"""
Run the reference backend server.

Usage:
    python run_api.py
    python run_api.py --seed seed.json --reload  # Development mode
"""

import argparse
import os
import uvicorn

from shared.config import get_settings


def main():
    parser = argparse.ArgumentParser(description="Run the blood bank reference backend")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    parser.add_argument("--seed", type=str, help="JSON file with initial requests and users")
    args = parser.parse_args()

    if args.seed:
        # Read by the app factory through Settings, including in reload workers
        os.environ["BLOODBANK_REFERENCE_SEED_PATH"] = args.seed
        get_settings.cache_clear()

    settings = get_settings()

    uvicorn.run(
        "api.app:create_app",
        factory=True,
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
