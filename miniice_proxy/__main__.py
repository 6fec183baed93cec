import uvicorn

from miniice_proxy.core import config


def main() -> None:
    uvicorn.run("miniice_proxy.main:app", host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
