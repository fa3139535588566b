"""Logging configuration for the HiLink WebUI client."""

import logging

import colorlog

log = logging.getLogger("hilink")


def setup_logging(debug: bool = False) -> None:
    """
    Attach a coloured stream handler to the package logger.

    Library code only ever logs through ``log``; applications that want the
    output on the console call this once at start-up.
    """
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(level)
    log.handlers.clear()

    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s",
        datefmt="%H:%M:%S",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "bold_red",
        },
    ))
    log.addHandler(handler)

    if debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)
