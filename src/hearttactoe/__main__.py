"""Entry point for running HeartTacToe via ``python -m hearttactoe``."""

from __future__ import annotations

import logging
import os

import uvicorn

logger = logging.getLogger(__name__)


def resolve_log_level(name: str) -> int:
    """Map a level name such as ``debug`` to its ``logging`` value.

    Unknown names fall back to INFO instead of failing startup.
    """

    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(name: str) -> None:
    """Configure the root logger once for the whole process."""

    level = resolve_log_level(name)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    if level == logging.INFO and name.strip().upper() != "INFO":
        logger.warning("Unknown log level %r, using INFO", name)


def main() -> None:
    """Start the FastAPI-powered HeartTacToe server."""

    host = os.environ.get("HEARTTACTOE_HOST", "0.0.0.0")
    port = int(os.environ.get("HEARTTACTOE_PORT", "8000"))
    setup_logging(os.environ.get("HEARTTACTOE_LOG_LEVEL", "INFO"))
    uvicorn.run("hearttactoe.ui:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
