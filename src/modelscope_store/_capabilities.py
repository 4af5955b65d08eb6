"""Capability enum and CapabilitySet."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from modelscope_store._errors import CapabilityNotSupported

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class Capability(enum.Enum):
    """Operations a driver may implement."""

    LIST = "list"
    LINK = "link"
    MAKE_DIR = "make_dir"
    MOVE = "move"
    RENAME = "rename"
    COPY = "copy"
    REMOVE = "remove"
    PUT = "put"
    ARCHIVE_META = "archive_meta"
    ARCHIVE_LIST = "archive_list"
    ARCHIVE_EXTRACT = "archive_extract"
    ARCHIVE_DECOMPRESS = "archive_decompress"

    @property
    def is_mutating(self) -> bool:
        """``True`` for operations that change remote content."""
        return self in _MUTATING


_MUTATING = frozenset(
    {
        Capability.MAKE_DIR,
        Capability.MOVE,
        Capability.RENAME,
        Capability.COPY,
        Capability.REMOVE,
        Capability.PUT,
        Capability.ARCHIVE_DECOMPRESS,
    }
)


class CapabilitySet:
    """Immutable set of capabilities declared by a driver.

    :param capabilities: The supported capabilities.
    """

    __slots__ = ("_caps",)
    _caps: frozenset[Capability]

    def __init__(self, capabilities: Iterable[Capability]) -> None:
        object.__setattr__(self, "_caps", frozenset(capabilities))

    def supports(self, cap: Capability) -> bool:
        """Check whether a capability is supported."""
        return cap in self._caps

    def require(self, cap: Capability, *, backend: str = "", path: str | None = None) -> None:
        """Raise if a capability is not supported.

        :raises CapabilityNotSupported: If the capability is missing.
        """
        if cap not in self._caps:
            raise CapabilityNotSupported(
                f"Operation '{cap.value}' is not implemented",
                capability=cap.value,
                backend=backend or None,
                path=path,
            )

    @property
    def read_only(self) -> bool:
        """``True`` if no mutating capability is declared."""
        return not any(cap.is_mutating for cap in self._caps)

    def __contains__(self, cap: object) -> bool:
        return cap in self._caps

    def __iter__(self) -> Iterator[Capability]:
        return iter(self._caps)

    def __len__(self) -> int:
        return len(self._caps)

    def __repr__(self) -> str:
        names = sorted(c.name for c in self._caps)
        return f"CapabilitySet({{{', '.join(names)}}})"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("CapabilitySet is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("CapabilitySet is immutable")
