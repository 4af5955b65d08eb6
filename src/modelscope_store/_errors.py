"""Normalized error hierarchy for modelscope_store."""

from __future__ import annotations

from typing import Optional


class ModelScopeError(Exception):
    """Base class for all modelscope_store errors.

    :param message: Human-readable error description.
    :param path: The repository path involved in the error, if any.
    :param backend: The driver name involved, if any.
    """

    def __init__(self, message: str = "", *, path: Optional[str] = None, backend: Optional[str] = None) -> None:
        self.path = path
        self.backend = backend
        super().__init__(message)

    def _context(self) -> list[str]:
        parts: list[str] = []
        if self.path is not None:
            parts.append(f"path={self.path!r}")
        if self.backend is not None:
            parts.append(f"backend={self.backend!r}")
        return parts

    def __str__(self) -> str:
        message = self.args[0] if self.args else ""
        parts = [part for part in [message, *self._context()] if part]
        return " | ".join(parts)

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(self.args[0] if self.args else ""), *self._context()]
        return f"{cls}({', '.join(args)})"


class NotFound(ModelScopeError):
    """Raised when the remote API reports that a file, folder or repo is missing."""


class PermissionDenied(ModelScopeError):
    """Raised when the remote API refuses access (HTTP 401/403)."""


class InvalidPath(ModelScopeError):
    """Raised for malformed or unsafe repository paths."""


class CapabilityNotSupported(ModelScopeError):
    """Raised when an operation is not implemented by the driver.

    :param capability: The name of the unsupported capability.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        backend: Optional[str] = None,
        capability: str = "",
    ) -> None:
        self.capability = capability
        super().__init__(message, path=path, backend=backend)

    def _context(self) -> list[str]:
        parts = super()._context()
        if self.capability:
            parts.append(f"capability={self.capability!r}")
        return parts


class RemoteApiError(ModelScopeError):
    """Raised when the API answers with an unexpected status or ``Success=false``.

    :param status_code: HTTP status of the response, if known.
    :param code: The ``Code`` field of the JSON envelope, if any.
    :param request_id: The ``RequestId`` correlation identifier, if any.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        backend: Optional[str] = None,
        status_code: Optional[int] = None,
        code: Optional[int] = None,
        request_id: str = "",
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.request_id = request_id
        super().__init__(message, path=path, backend=backend)

    def _context(self) -> list[str]:
        parts = super()._context()
        if self.status_code is not None:
            parts.append(f"status_code={self.status_code}")
        if self.request_id:
            parts.append(f"request_id={self.request_id!r}")
        return parts


class ResponseDecodeError(ModelScopeError):
    """Raised when a response body is not a JSON object."""


class BackendUnavailable(ModelScopeError):
    """Raised when the remote service cannot be reached."""


class OperationCancelled(BackendUnavailable):
    """Raised when the caller cancelled the call or its deadline expired."""


class StrategiesExhausted(ModelScopeError):
    """Raised when every request variant was tried without success or error."""
