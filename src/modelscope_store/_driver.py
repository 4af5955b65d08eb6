"""Driver abstract base class: the contract a host consumes."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types import TracebackType

    from modelscope_store._capabilities import CapabilitySet
    from modelscope_store._context import CallContext
    from modelscope_store._models import DriverInfo, Link, StorageObject
    from modelscope_store._types import WritableContent


class Driver(abc.ABC):
    """Abstract base class for storage drivers.

    Every driver must implement all abstract methods. Operations a driver does
    not offer raise ``CapabilityNotSupported`` and are absent from
    :attr:`capabilities`. Transport exceptions must never leak; they are mapped
    to ``modelscope_store`` errors.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Unique identifier for this driver type (e.g. ``'modelscope'``)."""

    @property
    @abc.abstractmethod
    def capabilities(self) -> CapabilitySet:
        """Declared capabilities of this driver."""

    @property
    @abc.abstractmethod
    def info(self) -> DriverInfo:
        """Static metadata shown by the host."""

    @abc.abstractmethod
    def get_root_path(self) -> str:
        """Host path of the mount root."""

    @abc.abstractmethod
    def list_dir(self, path: str = "", *, context: CallContext | None = None) -> list[StorageObject]:
        """List the direct children of a directory.

        :param path: Directory path; empty or the root path means the root.
        """

    @abc.abstractmethod
    def link(
        self,
        file: StorageObject | str,
        *,
        redirect: bool = False,
        context: CallContext | None = None,
    ) -> Link:
        """Resolve a download URL for a file.

        :param redirect: If ``True``, follow the API's redirect and return the final target.
        """

    @abc.abstractmethod
    def make_dir(self, parent: str, name: str) -> StorageObject:
        """Create a directory."""

    @abc.abstractmethod
    def move(self, src: str, dst_dir: str) -> StorageObject:
        """Move an object into another directory."""

    @abc.abstractmethod
    def rename(self, src: str, new_name: str) -> StorageObject:
        """Rename an object in place."""

    @abc.abstractmethod
    def copy(self, src: str, dst_dir: str) -> StorageObject:
        """Copy an object into another directory."""

    @abc.abstractmethod
    def remove(self, path: str) -> None:
        """Delete an object."""

    @abc.abstractmethod
    def put(self, dst_dir: str, name: str, content: WritableContent) -> StorageObject:
        """Upload a file."""

    @abc.abstractmethod
    def get_archive_meta(self, path: str, *, password: str = "") -> dict[str, object]:
        """Describe an archive file."""

    @abc.abstractmethod
    def list_archive(self, path: str, inner_path: str = "", *, password: str = "") -> list[StorageObject]:
        """List entries inside an archive."""

    @abc.abstractmethod
    def extract(self, path: str, inner_path: str, *, password: str = "") -> Link:
        """Link to a single entry inside an archive."""

    @abc.abstractmethod
    def archive_decompress(self, src: str, dst_dir: str, *, inner_path: str = "") -> list[StorageObject]:
        """Unpack an archive into a directory."""

    def close(self) -> None:  # noqa: B027
        """Release resources. Default is a no-op."""

    def __enter__(self) -> Driver:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
