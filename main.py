from loguru import logger

from markdown_worklogs.cli import app


def main() -> None:
    logger.debug("Starting markdown-worklogs")
    app()


if __name__ == "__main__":
    main()
