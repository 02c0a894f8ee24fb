"""HTTP session factory for talking to the upstream share service."""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import USER_AGENT


def build_session() -> requests.Session:
    """Return a requests.Session with a browser User-Agent and keep-alive."""
    session = requests.Session()
    # One attempt per call: a failed login or listing is reported, not
    # retried, so the whole request stays inside the host's time limit.
    retry = Retry(total=0, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Connection": "keep-alive",
    })
    return session
