"""
terabox_manifest.extract
========================
Share-page scraping: token and short-link id extraction.
"""

from .token import (
    JS_TOKEN_RE,
    PATTERN_VERSION,
    SHORTURL_RE,
    extract_js_token,
    extract_share_context,
    extract_short_link_id,
)

__all__ = [
    "JS_TOKEN_RE",
    "PATTERN_VERSION",
    "SHORTURL_RE",
    "extract_js_token",
    "extract_share_context",
    "extract_short_link_id",
]
