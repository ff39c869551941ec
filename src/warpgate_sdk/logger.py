"""Logging configuration for warpgate-sdk."""

import logging
import os
import sys

# TRACE sits below DEBUG and also shows HTTP transport logs
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_NOISY_LOGGERS = ("urllib3", "backoff")


class ColoredFormatter(logging.Formatter):
    """Log formatter that colors the level name with ANSI codes."""

    COLORS = {
        "TRACE": "\033[90m",
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"
    BOLD = "\033[1m"

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = (
                f"{self.COLORS[levelname]}{self.BOLD}{levelname}{self.RESET}"
            )

        result = super().format(record)

        record.levelname = levelname

        return result


def setup_logging(level: str | None = None) -> None:
    """Configure console logging for scripts and the CLI.

    The SDK itself never calls this; library users keep control of their
    handlers. ``level`` falls back to the LOG_LEVEL environment variable,
    then INFO.

    At DEBUG the urllib3 and backoff loggers are held at WARNING. Use
    TRACE to see them.
    """
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    numeric_level = TRACE if log_level == "TRACE" else getattr(
        logging, log_level, logging.INFO
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ColoredFormatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    logging.basicConfig(level=numeric_level, handlers=[handler], force=True)

    if log_level == "DEBUG":
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    elif log_level == "TRACE":
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(TRACE)

