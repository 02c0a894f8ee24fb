"""
Tests for the authentication module – login, cookie parsing, session cache.
"""

import threading
import unittest
from unittest.mock import MagicMock, patch

import requests
from urllib3 import HTTPHeaderDict

from terabox_manifest.auth.cache import SessionCache, SessionProvider
from terabox_manifest.auth.login import login_and_get_cookies, parse_set_cookies
from terabox_manifest.config import COOKIE_TTL, LOGIN_URL
from terabox_manifest.errors import AuthenticationError, NetworkError


def _make_response(status_code=200, cookies=None, history=None, set_cookie=None):
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.history = history or []
    headers = HTTPHeaderDict()
    for name, value in (cookies or {}).items():
        headers.add("Set-Cookie", f"{name}={value}; Path=/")
    for raw in set_cookie or []:
        headers.add("Set-Cookie", raw)
    resp.raw = MagicMock()
    resp.raw.headers = headers
    return resp


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class TestParseSetCookies(unittest.TestCase):
    def test_final_response_cookies(self):
        resp = _make_response(cookies={"ndus": "abc", "lang": "en"})
        self.assertEqual(parse_set_cookies(resp), {"ndus": "abc", "lang": "en"})

    def test_redirect_hop_cookies_included(self):
        hop = _make_response(status_code=302, cookies={"ndus": "abc"})
        resp = _make_response(cookies={"csrfToken": "tok"}, history=[hop])
        self.assertEqual(parse_set_cookies(resp), {"ndus": "abc", "csrfToken": "tok"})

    def test_later_hop_overrides(self):
        hop = _make_response(status_code=302, cookies={"lang": "zh"})
        resp = _make_response(cookies={"lang": "en"}, history=[hop])
        self.assertEqual(parse_set_cookies(resp)["lang"], "en")

    def test_parent_domain_cookie_kept(self):
        resp = _make_response(set_cookie=[
            "ndus=abc; Domain=.terabox.com; Path=/; HttpOnly",
            "browserid=xyz==; Expires=Thu, 01 Jan 1970 00:00:00 GMT",
        ])
        self.assertEqual(parse_set_cookies(resp), {"ndus": "abc", "browserid": "xyz=="})

    def test_malformed_header_ignored(self):
        resp = _make_response(set_cookie=["garbage", "=novalue"])
        self.assertEqual(parse_set_cookies(resp), {})


class TestLogin(unittest.TestCase):
    def test_success_returns_cookies(self):
        session = MagicMock()
        session.post.return_value = _make_response(cookies={"ndus": "abc", "lang": "en"})

        cookies = login_and_get_cookies(session, "me@example.com", "secret")

        self.assertEqual(cookies["ndus"], "abc")
        args, kwargs = session.post.call_args
        self.assertEqual(args[0], LOGIN_URL)
        self.assertEqual(kwargs["data"], {
            "login_email": "me@example.com",
            "login_pwd": "secret",
            "login_type": "1",
        })
        self.assertIn("timeout", kwargs)

    def test_missing_marker_is_authentication_error(self):
        session = MagicMock()
        session.post.return_value = _make_response(cookies={"lang": "en"})
        with self.assertRaises(AuthenticationError):
            login_and_get_cookies(session, "me@example.com", "secret")

    def test_soft_failure_status_with_marker_is_accepted(self):
        session = MagicMock()
        session.post.return_value = _make_response(status_code=403, cookies={"ndus": "abc"})
        self.assertEqual(login_and_get_cookies(session, "a", "b")["ndus"], "abc")

    def test_soft_failure_status_without_marker(self):
        session = MagicMock()
        session.post.return_value = _make_response(status_code=400)
        with self.assertRaises(AuthenticationError):
            login_and_get_cookies(session, "a", "b")

    def test_server_error_is_network_error(self):
        session = MagicMock()
        session.post.return_value = _make_response(status_code=502)
        with self.assertRaises(NetworkError):
            login_and_get_cookies(session, "a", "b")

    def test_transport_failure_is_network_error(self):
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(NetworkError):
            login_and_get_cookies(session, "a", "b")

    def test_marker_on_parent_domain_is_accepted(self):
        session = MagicMock()
        session.post.return_value = _make_response(
            set_cookie=["ndus=abc; Domain=.terabox.com; Path=/"]
        )
        self.assertEqual(login_and_get_cookies(session, "a", "b"), {"ndus": "abc"})

    def test_password_not_in_error_message(self):
        session = MagicMock()
        session.post.return_value = _make_response()
        with self.assertRaises(AuthenticationError) as ctx:
            login_and_get_cookies(session, "me@example.com", "hunter2")
        self.assertNotIn("hunter2", str(ctx.exception))


class TestSessionCache(unittest.TestCase):
    def test_empty_cache_is_invalid(self):
        self.assertFalse(SessionCache(clock=FakeClock()).is_valid())

    def test_valid_within_ttl(self):
        clock = FakeClock()
        cache = SessionCache(clock=clock)
        cache.store({"ndus": "abc"})
        clock.advance(COOKIE_TTL - 1)
        self.assertTrue(cache.is_valid())

    def test_invalid_at_ttl(self):
        clock = FakeClock()
        cache = SessionCache(clock=clock)
        cache.store({"ndus": "abc"})
        clock.advance(COOKIE_TTL)
        self.assertFalse(cache.is_valid())

    def test_store_replaces_wholesale(self):
        cache = SessionCache(clock=FakeClock())
        cache.store({"ndus": "old", "extra": "1"})
        cache.store({"ndus": "new"})
        self.assertEqual(cache.cookies, {"ndus": "new"})

    def test_clear(self):
        cache = SessionCache(clock=FakeClock())
        cache.store({"ndus": "abc"})
        cache.clear()
        self.assertFalse(cache.is_valid())


class TestSessionProvider(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.cache = SessionCache(clock=self.clock)
        self.provider = SessionProvider(
            "me@example.com", "secret", cache=self.cache, session=MagicMock()
        )

    @patch("terabox_manifest.auth.cache.login_and_get_cookies")
    def test_second_acquire_within_ttl_reuses_login(self, mock_login):
        mock_login.return_value = {"ndus": "abc"}

        first = self.provider.acquire()
        self.clock.advance(60)
        second = self.provider.acquire()

        self.assertEqual(first, second)
        self.assertEqual(mock_login.call_count, 1)

    @patch("terabox_manifest.auth.cache.login_and_get_cookies")
    def test_acquire_after_expiry_logs_in_once_more(self, mock_login):
        mock_login.side_effect = [{"ndus": "first"}, {"ndus": "second"}]

        self.provider.acquire()
        self.clock.advance(COOKIE_TTL + 1)
        cookies = self.provider.acquire()

        self.assertEqual(cookies, {"ndus": "second"})
        self.assertEqual(mock_login.call_count, 2)

    @patch("terabox_manifest.auth.cache.login_and_get_cookies")
    def test_failed_login_leaves_cache_empty(self, mock_login):
        mock_login.side_effect = AuthenticationError("no marker")
        with self.assertRaises(AuthenticationError):
            self.provider.acquire()
        self.assertIsNone(self.cache.cookies)

    @patch("terabox_manifest.auth.cache.login_and_get_cookies")
    def test_returned_cookies_are_a_copy(self, mock_login):
        mock_login.return_value = {"ndus": "abc"}
        cookies = self.provider.acquire()
        cookies["ndus"] = "tampered"
        self.assertEqual(self.provider.acquire(), {"ndus": "abc"})

    @patch("terabox_manifest.auth.cache.login_and_get_cookies")
    def test_separate_caches_do_not_share_state(self, mock_login):
        mock_login.return_value = {"ndus": "abc"}
        other = SessionProvider("x", "y", cache=SessionCache(clock=self.clock),
                                session=MagicMock())
        self.provider.acquire()
        other.acquire()
        self.assertEqual(mock_login.call_count, 2)

    @patch("terabox_manifest.auth.cache.login_and_get_cookies")
    def test_overlapping_misses_each_log_in_once(self, mock_login):
        barrier = threading.Barrier(2, timeout=5)
        lock = threading.Lock()
        issued = []

        def slow_login(session, email, password):
            with lock:
                cookies = {"ndus": f"login-{len(issued)}"}
                issued.append(cookies)
            # Both callers are inside a login before either stores
            barrier.wait()
            return cookies

        mock_login.side_effect = slow_login
        results, errors = [], []

        def worker():
            try:
                results.append(self.provider.acquire())
            except Exception as exc:  # surfaced through the errors list
                errors.append(exc)

        threads = [threading.Thread(target=worker) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        self.assertEqual(errors, [])
        self.assertEqual(len(results), 2)
        self.assertLessEqual(mock_login.call_count, 2)
        self.assertTrue(all("ndus" in cookies for cookies in results))
        self.assertIn(self.cache.cookies, issued)
        self.assertTrue(self.cache.is_valid())


if __name__ == "__main__":
    unittest.main()
