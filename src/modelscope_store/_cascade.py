"""Ordered request variants and the loop that tries them.

The ModelScope API accepts different URL spellings depending on the resource
and deployment. Each call enumerates a fixed, ordered list of
:class:`Candidate` descriptors and stops at the first one that succeeds.
"""

from __future__ import annotations

import dataclasses
import itertools
import logging
from typing import TYPE_CHECKING, TypeVar

from modelscope_store._config import ResourceKind
from modelscope_store._context import BACKGROUND
from modelscope_store._errors import ModelScopeError, OperationCancelled, StrategiesExhausted

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from modelscope_store._context import CallContext

T = TypeVar("T")

log = logging.getLogger(__name__)

FALLBACK_REVISIONS = ("master", "main")

_SEGMENTS: dict[ResourceKind, tuple[str, ...]] = {
    ResourceKind.MODEL: ("models", "model"),
    ResourceKind.DATASET: ("datasets", "dataset"),
}


@dataclasses.dataclass(frozen=True)
class Candidate:
    """One request variant.

    :param segment: Resource segment of the API path (``models``, ``dataset``...).
    :param revision: Revision sent as ``Revision``.
    :param param: Query parameter carrying the path, for endpoints with variants.
    """

    segment: str
    revision: str
    param: str = ""

    def __str__(self) -> str:
        label = f"{self.segment}@{self.revision}"
        return f"{label}[{self.param}]" if self.param else label


def segment_aliases(kind: ResourceKind) -> tuple[str, ...]:
    """Primary and legacy resource segments for ``kind``."""
    return _SEGMENTS[kind]


def revision_candidates(revision: str) -> list[str]:
    """Configured revision followed by the fallbacks, deduplicated case-insensitively.

    Example: ``revision_candidates("v2")`` returns ``["v2", "master", "main"]``.
    """
    seen: set[str] = set()
    result: list[str] = []
    for rev in (revision, *FALLBACK_REVISIONS):
        key = rev.strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(rev.strip())
    return result


def build_candidates(
    kind: ResourceKind,
    revision: str,
    params: Sequence[str] = ("",),
) -> list[Candidate]:
    """Cross segments x revisions x params in nesting order."""
    return [
        Candidate(segment=segment, revision=rev, param=param)
        for segment, rev, param in itertools.product(segment_aliases(kind), revision_candidates(revision), params)
    ]


def run_cascade(
    candidates: Iterable[Candidate],
    attempt: Callable[[Candidate], T],
    *,
    context: CallContext = BACKGROUND,
    operation: str = "",
    path: str | None = None,
    backend: str | None = None,
) -> T:
    """Call ``attempt`` for each candidate until one returns.

    ``attempt`` raises a :class:`ModelScopeError` to reject a candidate; the
    error is remembered and the next candidate is tried. Cancellation stops
    the loop at once.

    :raises OperationCancelled: If ``context`` is cancelled.
    :raises ModelScopeError: The last recorded error once candidates run out.
    :raises StrategiesExhausted: If there were no candidates.
    """
    last_error: ModelScopeError | None = None
    for candidate in candidates:
        context.check(backend=backend, path=path)
        try:
            return attempt(candidate)
        except OperationCancelled:
            raise
        except ModelScopeError as exc:
            log.warning("%s via %s failed: %s", operation or "request", candidate, exc)
            last_error = exc
    if last_error is not None:
        raise last_error
    raise StrategiesExhausted(f"All strategies failed for {operation or 'request'}", path=path, backend=backend)
