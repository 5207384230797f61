"""Entry point: ``python -m slack_mcp`` or the ``slack-mcp-server`` script."""

from __future__ import annotations

import asyncio
import sys

from .foundation.config import get_settings
from .foundation.logging import configure_logging, get_logger
from .server import serve

log = get_logger("slack_mcp")


def main() -> int:
    settings = get_settings()
    configure_logging(settings.logging.format, settings.logging.level)

    token = settings.require_token()
    if token.is_err():
        print(token.unwrap_err().message, file=sys.stderr)
        return 1

    try:
        asyncio.run(serve(settings, token.unwrap()))
    except KeyboardInterrupt:
        log.info("interrupted, shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
