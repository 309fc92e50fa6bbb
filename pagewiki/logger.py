#!/usr/bin/env python3

import logging, os
from logging.handlers import TimedRotatingFileHandler

# Loggers that share the wiki's handlers besides app.logger
SHARED_LOGGERS = ["waitress"]


def setup_logger(app):
    """
    Send the app and waitress loggers to a daily rotating file and the console.
    Reads WIKI_LOG_DIR, WIKI_LOG_NAME, WIKI_LOG_FORMAT, WIKI_LOG_LEVEL and
    WIKI_LOG_BACKUPS from app.config. Handlers from an earlier call are closed.
    """
    config = app.config
    logs_dir = config["WIKI_LOG_DIR"]
    os.makedirs(logs_dir, exist_ok=True)
    level = logging.getLevelName(str(config["WIKI_LOG_LEVEL"]).upper())

    formatter = logging.Formatter(config["WIKI_LOG_FORMAT"])
    file_handler = TimedRotatingFileHandler(
        os.path.join(logs_dir, config["WIKI_LOG_NAME"]),
        when="midnight",
        interval=1,
        backupCount=config["WIKI_LOG_BACKUPS"],
        encoding="utf-8",
    )
    console_handler = logging.StreamHandler()

    for logger in [app.logger] + [logging.getLogger(name) for name in SHARED_LOGGERS]:
        for handler in logger.handlers:
            handler.close()
        logger.handlers = []
        for handler in (file_handler, console_handler):
            handler.setFormatter(formatter)
            handler.setLevel(level)
            logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False

    app.logger.info(f"Logging {logging.getLevelName(level)} to {file_handler.baseFilename}")
    return app
