"""Console entry point: serve the gateway over HTTP with uvicorn."""

from __future__ import annotations

import logging

import uvicorn

from cloudflare_mcp.config import settings


def main() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(
        "cloudflare_mcp.mcp.http_server:app",
        host=settings.fastapi_host,
        port=settings.fastapi_port,
        reload=(settings.app_env == "development"),
    )


if __name__ == "__main__":
    main()
