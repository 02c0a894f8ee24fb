"""Authentication submodule – login, cookie parsing, session cache."""

from terabox_manifest.auth.login import login_and_get_cookies, parse_set_cookies
from terabox_manifest.auth.cache import SessionCache, SessionProvider

__all__ = [
    "login_and_get_cookies",
    "parse_set_cookies",
    "SessionCache",
    "SessionProvider",
]
