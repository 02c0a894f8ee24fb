"""Client for the upstream share listing endpoint."""

from typing import List, Optional

import requests

from .config import APP_ID, LIST_URL, REQUEST_TIMEOUT
from .errors import NetworkError, UpstreamError
from .logging_setup import log
from .models import ListEntry


class ListingClient:
    """
    Lists one directory of a share per call.

    The endpoint signals failure with a non-zero ``errno`` in the JSON
    body rather than with the HTTP status, so both are checked.
    """

    def __init__(self, session: requests.Session) -> None:
        self.session = session

    def list(
        self,
        token: str,
        short_link_id: str,
        directory_path: Optional[str] = None,
        cookies: Optional[dict] = None,
    ) -> List[ListEntry]:
        params = {
            "app_id": APP_ID,
            "jsToken": token,
            "shorturl": short_link_id,
        }
        # No dir parameter means "top level of the share"
        if directory_path:
            params["dir"] = directory_path

        log.debug("GET %s dir=%r", LIST_URL, directory_path or "/")
        try:
            resp = self.session.get(
                LIST_URL,
                params=params,
                cookies=cookies,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"Listing request failed: {exc}") from exc

        if resp.status_code >= 500:
            raise NetworkError(f"Listing endpoint returned HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamError(-1, "Listing response was not valid JSON") from exc
        if not isinstance(data, dict):
            raise UpstreamError(-1, "Listing response was not a JSON object")

        errno = data.get("errno", -1)
        if errno != 0:
            message = data.get("errmsg") or "Unknown error"
            log.debug("Listing errno=%s errmsg=%r", errno, message)
            raise UpstreamError(errno, message)

        return [ListEntry.from_api(item) for item in data.get("list") or []]
