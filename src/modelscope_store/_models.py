"""Immutable records for API payloads and host-facing objects."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)

# Type tag the API uses for directories; every other tag is a file.
TREE_TYPE = "tree"


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclasses.dataclass(frozen=True)
class RemoteEntry:
    """One file or directory record from the API.

    :param name: Final path component.
    :param path: Repo-relative path as returned by the API.
    :param type: Type tag (``"tree"`` for directories).
    :param size: Size in bytes.
    :param committed_date: Last commit time in epoch seconds.
    """

    name: str
    path: str
    type: str
    size: int = 0
    committed_date: int = 0

    @property
    def is_dir(self) -> bool:
        return self.type == TREE_TYPE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RemoteEntry:
        """Build from an API ``Files`` item (capitalised keys)."""
        return cls(
            name=str(data.get("Name") or ""),
            path=str(data.get("Path") or ""),
            type=str(data.get("Type") or ""),
            size=_as_int(data.get("Size")),
            committed_date=_as_int(data.get("CommittedDate")),
        )


@dataclasses.dataclass(frozen=True)
class FileListResult:
    """The API's response envelope for listing endpoints.

    :param entries: Entries from ``Data.Files``, in API order.
    :param success: The ``Success`` flag.
    :param code: The numeric ``Code`` field.
    :param message: The ``Message`` field.
    :param request_id: The ``RequestId`` correlation identifier.
    """

    entries: tuple[RemoteEntry, ...] = ()
    success: bool = False
    code: int = 0
    message: str = ""
    request_id: str = ""

    @property
    def is_successful(self) -> bool:
        """A response counts as successful if ``Success`` is true or ``Code`` is 200."""
        return self.success or self.code == 200

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FileListResult:
        payload = data.get("Data")
        files = payload.get("Files") if isinstance(payload, dict) else None
        entries = tuple(RemoteEntry.from_dict(item) for item in files or () if isinstance(item, dict))
        return cls(
            entries=entries,
            success=data.get("Success") is True,
            code=_as_int(data.get("Code")),
            message=str(data.get("Message") or ""),
            request_id=str(data.get("RequestId") or ""),
        )


@dataclasses.dataclass(frozen=True)
class StorageObject:
    """Host-facing view of a file or directory.

    :param name: Final path component.
    :param path: Path the host uses to address this object.
    :param size: Size in bytes (``0`` for directories).
    :param modified_at: Last modification time (epoch for directories).
    :param is_dir: Whether the object is a directory.
    :param id: Stable identifier; the API path of the entry.
    """

    name: str
    path: str
    size: int
    modified_at: datetime
    is_dir: bool
    id: str = ""

    @classmethod
    def from_entry(cls, entry: RemoteEntry, *, path: str | None = None) -> StorageObject:
        """Map an API entry, optionally overriding the exposed path."""
        if entry.is_dir:
            modified = EPOCH
        else:
            modified = datetime.fromtimestamp(entry.committed_date, tz=timezone.utc)
        return cls(
            name=entry.name,
            path=entry.path if path is None else path,
            size=entry.size,
            modified_at=modified,
            is_dir=entry.is_dir,
            id=entry.path,
        )


@dataclasses.dataclass(frozen=True)
class Link:
    """A resolved download link.

    :param url: Absolute URL the host can fetch.
    """

    url: str


@dataclasses.dataclass(frozen=True)
class DriverInfo:
    """Static metadata a driver advertises to the host.

    :param name: Registration identifier.
    :param display_name: Human-readable driver name.
    :param only_proxy: Whether downloads must be proxied through the host.
    """

    name: str
    display_name: str
    only_proxy: bool = False
