"""Local server entrypoint."""

import uvicorn

from snap_market.config import Settings


def main() -> None:
    """Serve the ASGI app with uvicorn."""
    settings = Settings()
    uvicorn.run("snap_market.api.asgi:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
