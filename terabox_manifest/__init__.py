"""
terabox_manifest
================
Python package that logs into TeraBox, scrapes the share-page token and
returns a flattened manifest of every file in a share with direct
download links, as a library, a CLI or a small JSON HTTP API.

Package structure
-----------------
terabox_manifest/
├── __init__.py       – package init and public API
├── config.py         – configuration constants and env overrides
├── errors.py         – error taxonomy (each error knows its HTTP status)
├── logging_setup.py  – colorlog logger setup
├── session.py        – requests.Session factory
├── models.py         – ShareContext / ListEntry / FileRecord / Manifest
├── utils.py          – byte-size formatting, folder-path joining
├── listing.py        – ListingClient for the share/list endpoint
├── tree.py           – TreeController (eager and lazy directory walks)
├── api.py            – Flask app factory
├── cli.py            – argparse CLI (``python -m terabox_manifest``)
├── auth/             – sub-package: login and time-boxed session cache
│   ├── login.py
│   └── cache.py
└── extract/          – sub-package: share-page scraping
    └── token.py

Quick start
-----------
    from terabox_manifest import SessionProvider, TreeController

    controller = TreeController(SessionProvider("me@example.com", "secret"))
    manifest = controller.resolve("https://www.1024tera.com/s/1abc", "eager")
    print(manifest.to_dict())
"""

from .auth     import SessionCache, SessionProvider, login_and_get_cookies
from .errors   import (
    AuthenticationError,
    InvalidRequestError,
    NetworkError,
    ShortLinkNotFoundError,
    TeraboxError,
    TokenNotFoundError,
    UpstreamError,
)
from .extract  import extract_share_context
from .listing  import ListingClient
from .models   import Continuation, FileRecord, ListEntry, Manifest, ShareContext
from .tree     import ListMode, TreeController
from .utils    import readable_size

__all__ = [
    "SessionCache",
    "SessionProvider",
    "login_and_get_cookies",
    "AuthenticationError",
    "InvalidRequestError",
    "NetworkError",
    "ShortLinkNotFoundError",
    "TeraboxError",
    "TokenNotFoundError",
    "UpstreamError",
    "extract_share_context",
    "ListingClient",
    "Continuation",
    "FileRecord",
    "ListEntry",
    "Manifest",
    "ShareContext",
    "ListMode",
    "TreeController",
    "readable_size",
]
