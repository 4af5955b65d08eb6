"""Shared test fixtures and marker registration."""

from __future__ import annotations

import dataclasses
import json
from typing import TYPE_CHECKING, Any

import pytest
import requests

if TYPE_CHECKING:
    from collections.abc import Callable


def pytest_configure(config: object) -> None:
    """Register custom markers."""
    if isinstance(config, pytest.Config):
        config.addinivalue_line("markers", "integration: talks to the live ModelScope API")


@dataclasses.dataclass
class RecordedCall:
    """One request seen by :class:`FakeSession`."""

    method: str
    url: str
    params: dict[str, Any] | None
    json: dict[str, Any] | None
    allow_redirects: bool
    timeout: float | None


Answer = Any  # requests.Response | BaseException | Callable[[RecordedCall], Any]


class FakeSession:
    """Stand-in for ``requests.Session`` that records calls and replays answers.

    Queued answers are consumed in order; once the queue is empty every request
    gets ``fallback``. An answer may be a response, an exception to raise, or a
    callable receiving the :class:`RecordedCall`.
    """

    def __init__(self, *answers: Answer) -> None:
        self.calls: list[RecordedCall] = []
        self.closed = False
        self.fallback: Answer | None = None
        self._answers = list(answers)

    def queue(self, *answers: Answer) -> None:
        self._answers.extend(answers)

    def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        allow_redirects: bool = True,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> requests.Response:
        call = RecordedCall(method, url, params, json, allow_redirects, timeout)
        self.calls.append(call)
        if self._answers:
            answer = self._answers.pop(0)
        elif self.fallback is not None:
            answer = self.fallback
        else:
            raise AssertionError(f"Unexpected request: {method} {url}")
        if callable(answer):
            answer = answer(call)
        if isinstance(answer, BaseException):
            raise answer
        return answer  # type: ignore[no-any-return]

    def close(self) -> None:
        self.closed = True


def make_response(
    status: int = 200,
    body: object = None,
    *,
    headers: dict[str, str] | None = None,
    raw: bytes | None = None,
) -> requests.Response:
    """Build a real ``requests.Response`` with a JSON (or raw) body."""
    response = requests.Response()
    response.status_code = status
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = b""
    response.headers.update(headers or {})
    response.encoding = "utf-8"
    return response


def file_entry(
    name: str,
    path: str | None = None,
    *,
    type: str = "blob",
    size: int = 0,
    committed_date: int = 0,
) -> dict[str, Any]:
    return {
        "Name": name,
        "Path": path if path is not None else name,
        "Type": type,
        "Size": size,
        "CommittedDate": committed_date,
    }


def listing_body(*files: dict[str, Any], success: bool = True, code: int = 200, message: str = "") -> dict[str, Any]:
    return {
        "Data": {"Files": list(files)},
        "Success": success,
        "Code": code,
        "Message": message,
        "RequestId": "req-123",
    }


@pytest.fixture()
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def respond() -> Callable[..., requests.Response]:
    return make_response


@pytest.fixture()
def entry() -> Callable[..., dict[str, Any]]:
    return file_entry


@pytest.fixture()
def listing() -> Callable[..., dict[str, Any]]:
    return listing_body
