"""
Tree controller: session -> share page -> token -> listing -> manifest.

Directories are walked with an explicit FIFO worklist rather than
recursion. Eager mode drains the worklist completely; lazy mode lists a
single directory and turns every sub-directory it finds into a
continuation the caller can request separately, which keeps each call
to one listing round-trip under a serverless time limit.
"""

from collections import deque
from enum import Enum
from typing import Callable, Optional

import requests

from .auth import SessionProvider
from .config import REQUEST_TIMEOUT
from .errors import InvalidRequestError, NetworkError
from .extract import extract_share_context
from .listing import ListingClient
from .logging_setup import log
from .models import Continuation, FileRecord, Manifest, ShareContext
from .utils import join_folder


class ListMode(str, Enum):
    """How sub-directories are handled."""

    EAGER = "eager"
    LAZY = "lazy"

    @classmethod
    def parse(cls, value: "str | ListMode") -> "ListMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidRequestError(
                f"Unknown listing mode {value!r} (expected 'eager' or 'lazy')"
            ) from None


class TreeController:
    """
    Orchestrates one share lookup end to end.

    ``on_directory(listed, pending)`` is called after every listing
    round-trip; the CLI hooks a progress bar onto it.
    """

    def __init__(
        self,
        provider: SessionProvider,
        session: Optional[requests.Session] = None,
        listing: Optional[ListingClient] = None,
        on_directory: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        self.provider = provider
        self.session = session if session is not None else provider.session
        self.listing = listing if listing is not None else ListingClient(self.session)
        self.on_directory = on_directory

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, share_url: str, mode: "str | ListMode") -> Manifest:
        """Build the manifest for *share_url*, expanding per *mode*."""
        mode = ListMode.parse(mode)
        if not share_url:
            raise InvalidRequestError("No link provided")

        cookies = self.provider.acquire()
        html, final_url = self.fetch_share_page(share_url, cookies)
        share = extract_share_context(html, final_url)
        log.debug("Share context: shorturl=%s", share.short_link_id)

        manifest = self._walk(
            share, cookies,
            directory_path=None,
            folder="",
            expand=mode is ListMode.EAGER,
        )
        manifest.share = share
        log.info(
            "Resolved %s (%s): %d file(s), %s",
            share.short_link_id, mode.value,
            manifest.file_count, manifest.total_size_readable,
        )
        return manifest

    def list_directory(
        self, directory_path: str, token: str, short_link_id: str
    ) -> Manifest:
        """List one directory named by a continuation; no page re-fetch."""
        if not (directory_path and token and short_link_id):
            raise InvalidRequestError(
                "Missing required parameters: path, jsToken, shorturl"
            )
        cookies = self.provider.acquire()
        share = ShareContext(token=token, short_link_id=short_link_id)
        manifest = self._walk(
            share, cookies,
            directory_path=directory_path,
            folder=directory_path,
            expand=False,
        )
        manifest.directory = directory_path
        return manifest

    def fetch_share_page(self, share_url: str, cookies: dict) -> tuple[str, str]:
        """GET the share page; return its body and the URL after redirects."""
        log.debug("GET %s", share_url)
        try:
            resp = self.session.get(
                share_url,
                cookies=cookies,
                timeout=REQUEST_TIMEOUT,
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"Failed to fetch share page: {exc}") from exc

        if resp.status_code >= 500:
            raise NetworkError(f"Share page returned HTTP {resp.status_code}")
        return resp.text, resp.url

    # ------------------------------------------------------------------
    # Worklist
    # ------------------------------------------------------------------

    def _walk(
        self,
        share: ShareContext,
        cookies: dict,
        directory_path: Optional[str],
        folder: str,
        expand: bool,
    ) -> Manifest:
        manifest = Manifest()
        pending: deque[tuple[Optional[str], str]] = deque([(directory_path, folder)])
        seen: set[Optional[str]] = {directory_path}
        listed = 0

        while pending:
            path, current_folder = pending.popleft()
            entries = self.listing.list(
                share.token, share.short_link_id, path, cookies=cookies
            )
            listed += 1

            for entry in entries:
                if not entry.is_directory:
                    manifest.total_size += entry.size
                    manifest.files.append(FileRecord(
                        filename=entry.name,
                        folder=current_folder,
                        size=entry.size,
                        download_url=entry.download_url,
                    ))
                elif expand:
                    # An empty or repeated path would re-list a directory
                    # already walked and never terminate.
                    if not entry.path or entry.path in seen:
                        log.warning("Skipping directory %r with path %r",
                                    entry.name, entry.path)
                        continue
                    seen.add(entry.path)
                    pending.append((entry.path, join_folder(current_folder, entry.name)))
                elif not entry.path:
                    # A continuation without a path can never be listed
                    log.warning("Skipping directory %r without a path", entry.name)
                else:
                    manifest.files.append(FileRecord(
                        filename=entry.name,
                        folder=current_folder,
                        is_directory=True,
                        continuation=Continuation(
                            path=entry.path,
                            token=share.token,
                            short_link_id=share.short_link_id,
                        ),
                    ))

            if self.on_directory is not None:
                self.on_directory(listed, len(pending))

        return manifest
