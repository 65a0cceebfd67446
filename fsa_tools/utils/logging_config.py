"""Logging setup for command-line use of `fsa_tools`.

The library modules only create loggers (named after their module) and
never configure them; `setup_logging` is called by the command-line
entry point.

"""

import logging
import logging.config

LOGGER_NAME = "fsa_tools"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

def setup_logging(log_level="WARNING", log_file=None):
    """Configure the `fsa_tools` logger.

    Parameters
    ----------
    log_level : string
        one of `LOG_LEVELS`

    log_file : string
        if given, also write detailed log records to this file

    """
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
            "stream": "ext://sys.stderr",
        }
    }
    if log_file is not None:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "detailed",
            "filename": log_file,
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "format": "%(levelname)s: %(name)s: %(message)s"
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - "
                          "%(filename)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
        },
        "handlers": handlers,
        "loggers": {
            LOGGER_NAME: {
                "level": log_level,
                "handlers": list(handlers),
                "propagate": False,
            }
        },
    })
