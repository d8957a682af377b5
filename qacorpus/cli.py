"""Command line entry for the QA corpus tool."""

from __future__ import annotations

import logging
import sys

import uvicorn

from qacorpus.api.main import app
from qacorpus.core.config import settings


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_server() -> int:
    """Serve until interrupted; non-zero when the store failed to close on shutdown."""

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
    if getattr(app.state, "shutdown_error", None) is not None:
        return 1
    return 0


def main() -> int:
    configure_logging()
    return run_server()


if __name__ == "__main__":
    sys.exit(main())
