#!/usr/bin/env python3
"""
Clinic booking service.

Main entry point for the application.
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from clinic.core.config import get_settings, load_env_variables
from clinic.core.logger import setup_structured_logging


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Clinic booking API server")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (defaults to LOG_LEVEL)",
    )
    args = parser.parse_args()

    load_env_variables()
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        sys.exit(1)

    level = args.log_level or settings.log_level
    setup_structured_logging(level, json_format=settings.log_json, diagnose=settings.is_development())
    logger = logging.getLogger(__name__)

    import uvicorn

    from web.app import create_app

    try:
        app = create_app(settings)
        logger.info(f"Serving clinic booking API on {args.host}:{args.port}")
        uvicorn.run(app, host=args.host, port=args.port, log_config=None, log_level=level.lower())
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
