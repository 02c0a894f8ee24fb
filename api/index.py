"""Serverless entry point: hosts import ``app`` from this module."""

from terabox_manifest.api import create_app
from terabox_manifest.logging_setup import setup_logging

setup_logging()

app = create_app()
