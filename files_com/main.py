"""Main entry point for running the API server."""

import uvicorn

from files_com.core.config import get_api_settings


def main() -> None:
    """Run the API server with uvicorn."""
    settings = get_api_settings()

    uvicorn.run(
        "files_com.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
