import logging
import logging.config
import os
import sys

FORMAT = "%(asctime)s %(levelname)-6s %(name)8s:%(lineno)d %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"

# libraries that only get to speak up when something is wrong
QUIET = ("xrpl", "websockets", "uvicorn.access")


def logging_config(level: str = "INFO", log_file: str | None = None) -> dict:
    """dictConfig for the `fillbook` loggers: stdout always, plus `log_file` when given."""
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": sys.stdout,
        },
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "default",
            "filename": log_file,
            "mode": "a",
        }
    names = list(handlers)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": FORMAT, "datefmt": DATEFMT}},
        "handlers": handlers,
        "loggers": {
            "fillbook": {"level": level.upper(), "handlers": names, "propagate": False},
            **{name: {"level": "WARNING", "handlers": names, "propagate": False} for name in QUIET},
        },
        "root": {"level": "WARNING", "handlers": names},
    }


def setup_logging(level: str | None = None, log_file: str | None = None):
    """Apply the logging config. `LOG_LEVEL` and `LOG_FILE` fill in what isn't passed."""
    level = level or os.getenv("LOG_LEVEL", "INFO")
    log_file = log_file or os.getenv("LOG_FILE")
    logging.config.dictConfig(logging_config(level, log_file))
    os.environ.setdefault("PYTHONUNBUFFERED", "1")
