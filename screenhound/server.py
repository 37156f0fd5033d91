"""
Run the Screenhound API with uvicorn.
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from screenhound.app import create_app
from screenhound.config import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Screenhound backend server")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    args = parser.parse_args()

    app = create_app(settings)
    logger.info("Screenhound backend running on port %d", args.port)
    logger.info("Twilio webhook path: /webhook/twilio")
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
