"""Command-line entrypoint that serves the API with uvicorn."""

import uvicorn

from macromate.config import Settings


def main() -> None:
    """Run the ASGI app on the configured port."""
    settings = Settings()
    uvicorn.run(
        "macromate.api.asgi:app",
        host="0.0.0.0",  # noqa: S104
        port=settings.port,
        reload=settings.environment == "local",
    )


if __name__ == "__main__":
    main()
