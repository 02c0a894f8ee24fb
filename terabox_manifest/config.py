"""Configuration constants for the TeraBox share manifest service."""

import os
import re

# Credentials are only read from the environment; never hardcode them here.
DEFAULT_EMAIL = os.environ.get("TERABOX_EMAIL", "")
DEFAULT_PASSWORD = os.environ.get("TERABOX_PASSWORD", "")
DEFAULT_MODE = os.environ.get("TERABOX_MODE", "lazy")
DEFAULT_PORT = int(os.environ.get("PORT", "3000"))

UPSTREAM_BASE = "https://www.1024tera.com"
LOGIN_URL     = UPSTREAM_BASE + "/api/user/login"
LIST_URL      = UPSTREAM_BASE + "/share/list"
APP_ID        = "250528"

SESSION_MARKER_COOKIE = "ndus"   # present only after a genuine login
COOKIE_TTL            = 3600     # seconds a login is reused for

# Short on purpose: serverless hosts kill the whole invocation at ~10 s.
REQUEST_TIMEOUT = float(os.environ.get("TERABOX_TIMEOUT", "8"))

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_3_1) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Path the HTTP layer serves directory continuations on
DIRECTORY_ENDPOINT = "/api/directory"

# Share URLs accepted by the CLI without a warning
SHARE_URL_RE = re.compile(
    r"^https?://(?:www\.)?[a-z0-9.\-]*(?:tera|dubox)[a-z0-9.\-]*/"
    r"(?:s/|sharing/link\?|wap/share/filelist\?)",
    re.IGNORECASE,
)
