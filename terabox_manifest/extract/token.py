"""
terabox_manifest.extract.token
==============================
Scrapes the listing token and short-link id out of a share page.

The patterns below are a contract with the upstream page layout; bump
``PATTERN_VERSION`` whenever one of them changes.

* ``window.jsToken`` is assigned a percent-encoded, quote-delimited value
  inside an inline ``<script>`` (``...%22<token>%22...``). The match
  never crosses a line break, so a mere reference to the variable cannot
  pick up an unrelated quoted value further down the page.
* The short-link id is the ``surl`` query parameter of the URL reached
  after redirects, or failing that a ``shorturl = '...'`` assignment in
  the page itself (the page is sometimes served without the redirect).
"""

import re
import urllib.parse

from bs4 import BeautifulSoup

from ..errors import ShortLinkNotFoundError, TokenNotFoundError
from ..models import ShareContext

PATTERN_VERSION = 1

JS_TOKEN_RE = re.compile(r"window\.jsToken.*?%22(.*?)%22")
SHORTURL_RE = re.compile(r"""shorturl\s*=\s*['"]([^'"]+)['"]""")


def _inline_scripts(html: str) -> list[str]:
    soup = BeautifulSoup(html, "lxml")
    return [
        el.get_text()
        for el in soup.find_all("script")
        if not el.get("src")
    ]


def extract_js_token(html: str) -> str:
    """Return the decoded jsToken; raise TokenNotFoundError if absent."""
    # Inline scripts first; the raw body catches pages whose markup is
    # too broken for the parser to recover the <script> element.
    for text in (*_inline_scripts(html), html):
        m = JS_TOKEN_RE.search(text)
        if m and m.group(1):
            return urllib.parse.unquote(m.group(1))
    raise TokenNotFoundError("jsToken not found")


def extract_short_link_id(html: str, final_url: str | None) -> str:
    """Return the short-link id from *final_url*, else from the page body."""
    try:
        query = urllib.parse.urlparse(final_url or "").query
        surl = urllib.parse.parse_qs(query).get("surl", [""])[0]
    except ValueError:
        surl = ""
    if surl:
        return surl

    m = SHORTURL_RE.search(html)
    if m:
        return m.group(1)
    raise ShortLinkNotFoundError("Failed to extract shorturl")


def extract_share_context(html: str, final_url: str | None) -> ShareContext:
    """Pure (body, url) -> ShareContext; never touches the network."""
    return ShareContext(
        token=extract_js_token(html),
        short_link_id=extract_short_link_id(html, final_url),
    )
