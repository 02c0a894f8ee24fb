"""Login against the upstream account API and collect session cookies."""

import requests

from ..config import LOGIN_URL, REQUEST_TIMEOUT, SESSION_MARKER_COOKIE
from ..errors import AuthenticationError, NetworkError
from ..logging_setup import log


def parse_set_cookies(resp: requests.Response) -> dict[str, str]:
    """
    Return every cookie set by *resp* as a plain name -> value dict.

    Raw Set-Cookie headers are read rather than resp.cookies: the cookie
    jar drops cookies whose Domain differs from the login host, and the
    upstream sets its marker cookie on the parent domain.
    """
    cookies: dict[str, str] = {}
    # Redirect hops set cookies too; later hops win
    for hop in (*resp.history, resp):
        for header in hop.raw.headers.getlist("Set-Cookie"):
            name, sep, value = header.split(";", 1)[0].partition("=")
            if sep and name.strip():
                cookies[name.strip()] = value.strip()
    return cookies


def login_and_get_cookies(
    session: requests.Session, email: str, password: str
) -> dict[str, str]:
    """
    POST the account credentials to the login endpoint.

    The upstream answers soft failures with 4xx codes and real ones with a
    missing session cookie, so the HTTP status alone says nothing about
    success. Only the presence of the ``ndus`` marker cookie does.

    Raises NetworkError on transport failures and 5xx responses,
    AuthenticationError when no marker cookie comes back.
    """
    payload = {
        "login_email": email,
        "login_pwd": password,
        "login_type": "1",
    }
    try:
        resp = session.post(
            LOGIN_URL,
            data=payload,
            timeout=REQUEST_TIMEOUT,
            allow_redirects=True,
        )
    except requests.RequestException as exc:
        log.error("Login POST failed: %s", exc)
        raise NetworkError(f"Login request failed: {exc}") from exc

    if not 200 <= resp.status_code < 500:
        raise NetworkError(f"Login endpoint returned HTTP {resp.status_code}")

    cookies = parse_set_cookies(resp)
    log.debug("Login HTTP %s, cookies set: %s", resp.status_code, list(cookies))

    if SESSION_MARKER_COOKIE not in cookies:
        raise AuthenticationError(
            "Login failed: check credentials or response format "
            f"(no {SESSION_MARKER_COOKIE} cookie, HTTP {resp.status_code})"
        )

    log.info("Login successful for %s (%d cookies)", email, len(cookies))
    return cookies
