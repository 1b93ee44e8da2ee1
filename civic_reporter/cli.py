"""Command-line entry point: serve the API with uvicorn."""

from __future__ import annotations

import argparse
import logging

import uvicorn

from civic_reporter.core.config import settings

logger = logging.getLogger("civic_reporter")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run the civic issue reporter server.")
    parser.add_argument("--host", default=settings.host, help="bind address (env HOST)")
    parser.add_argument("--port", type=int, default=settings.port, help="listen port (env PORT)")
    parser.add_argument("--reload", action="store_true", help="reload on code changes")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    base = f"http://localhost:{args.port}"
    logger.info("%s server running on port %s", settings.app_name, args.port)
    logger.info("Issues API: %s%s/issues", base, settings.api_prefix)
    logger.info("Uploaded photos: %s/uploads", base)
    logger.info("API docs: %s/docs", base)

    uvicorn.run(
        "civic_reporter.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
