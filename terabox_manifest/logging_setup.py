"""Logging configuration for the TeraBox share manifest service."""

import logging

import colorlog

log = logging.getLogger("terabox-manifest")

_LOG_COLORS = {
    "DEBUG":    "cyan",
    "INFO":     "green",
    "WARNING":  "yellow",
    "ERROR":    "red",
    "CRITICAL": "bold_red",
}


def setup_logging(debug: bool = False) -> None:
    """
    Attach a single colored stderr handler to the service logger.

    Safe to call more than once (the serverless entry point and the CLI
    both call it). urllib3's connection chatter is only shown with
    ``debug``; otherwise it is held at WARNING so that one request's
    log stays readable.
    """
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(level)
    log.handlers.clear()

    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        log_colors=_LOG_COLORS,
    ))
    log.addHandler(handler)

    logging.getLogger("urllib3").setLevel(logging.DEBUG if debug else logging.WARNING)
