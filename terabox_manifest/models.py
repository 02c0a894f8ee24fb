"""Data classes shared by the listing client, tree controller and API."""

import urllib.parse
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import DIRECTORY_ENDPOINT
from .utils import readable_size


# ---------------------------------------------------------------------------
# Per-request share state
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ShareContext:
    """Token and short-link id scraped from one share page."""

    token: str
    short_link_id: str


@dataclass
class ListEntry:
    """One raw item from the upstream listing endpoint."""

    name: str
    is_directory: bool
    size: int = 0
    download_url: str = ""
    path: str = ""

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "ListEntry":
        # isdir arrives as 0/1 or "0"/"1" depending on the endpoint revision
        try:
            is_dir = int(item.get("isdir") or 0) == 1
        except (TypeError, ValueError):
            is_dir = False
        try:
            size = int(item.get("size") or 0)
        except (TypeError, ValueError):
            size = 0
        return cls(
            name=item.get("server_filename", ""),
            is_directory=is_dir,
            size=size,
            download_url=item.get("dlink", ""),
            path=item.get("path", ""),
        )


# ---------------------------------------------------------------------------
# Output records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Continuation:
    """Everything a follow-up call needs to list one directory."""

    path: str
    token: str
    short_link_id: str

    def fetch_url(self) -> str:
        query = urllib.parse.urlencode({
            "path": self.path,
            "jsToken": self.token,
            "shorturl": self.short_link_id,
        })
        return f"{DIRECTORY_ENDPOINT}?{query}"

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "jsToken": self.token,
            "shorturl": self.short_link_id,
        }


@dataclass
class FileRecord:
    """A file (or, in lazy mode, a directory stub) in the manifest."""

    filename: str
    folder: str = ""
    size: int = 0
    download_url: Optional[str] = None
    is_directory: bool = False
    continuation: Optional[Continuation] = None

    @property
    def size_readable(self) -> str:
        return "Directory" if self.is_directory else readable_size(self.size)

    def to_dict(self) -> dict:
        data = {
            "filename": self.filename,
            "path": self.folder,
            "size": self.size_readable,
            "isdir": self.is_directory,
        }
        if self.is_directory:
            if self.continuation is not None:
                data["dir_path"] = self.continuation.path
                data["fetch_url"] = self.continuation.fetch_url()
                data["continuation"] = self.continuation.to_dict()
        else:
            data["url"] = self.download_url
        return data


@dataclass
class Manifest:
    """Flattened listing returned to the caller."""

    total_size: int = 0
    files: List[FileRecord] = field(default_factory=list)
    share: Optional[ShareContext] = None
    directory: Optional[str] = None

    @property
    def file_count(self) -> int:
        return sum(1 for record in self.files if not record.is_directory)

    @property
    def total_size_readable(self) -> str:
        return readable_size(self.total_size)

    def to_dict(self) -> dict:
        data = {
            "status": "success",
            "total_size": self.total_size_readable,
            "file_count": self.file_count,
            "files": [record.to_dict() for record in self.files],
        }
        if self.directory is not None:
            data["directory"] = self.directory
        if self.share is not None:
            data["_meta"] = {
                "jsToken": self.share.token,
                "shorturl": self.share.short_link_id,
            }
        return data
