import uvicorn

from portfolio_api.api.app import create_app
from portfolio_api.core.logging import configure_logging
from portfolio_api.core.settings import Settings


def main() -> None:
    settings = Settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
