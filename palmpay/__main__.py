import uvicorn

from palmpay.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "palmpay.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
