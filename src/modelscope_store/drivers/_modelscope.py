"""Read-only ModelScope hub driver using requests."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, NoReturn
from urllib.parse import quote, urlencode

from modelscope_store._capabilities import Capability, CapabilitySet
from modelscope_store._cascade import Candidate, build_candidates, run_cascade
from modelscope_store._config import API_ENDPOINT, DEFAULT_REVISION, ModelScopeConfig, ResourceKind
from modelscope_store._context import BACKGROUND
from modelscope_store._driver import Driver
from modelscope_store._errors import (
    BackendUnavailable,
    CapabilityNotSupported,
    InvalidPath,
    ModelScopeError,
    NotFound,
    OperationCancelled,
    PermissionDenied,
    RemoteApiError,
    ResponseDecodeError,
)
from modelscope_store._models import DriverInfo, FileListResult, Link, StorageObject
from modelscope_store._path import is_root, join, normalize, strip_root

if TYPE_CHECKING:
    from collections.abc import Iterator

    import requests

    from modelscope_store._context import CallContext
    from modelscope_store._types import JSONObject, QueryParams, WritableContent

log = logging.getLogger(__name__)

_CAPABILITIES = CapabilitySet({Capability.LIST, Capability.LINK})
_INFO = DriverInfo(name="modelscope", display_name="ModelScope", only_proxy=False)

# Statuses after which the same endpoint is retried as a POST with a JSON body.
_POST_FALLBACK_STATUSES = frozenset({404, 405})

_TREE_PARAMS = ("Root", "Path")
_TREE_PAGE_SIZE = 1000
_BODY_LOG_LIMIT = 512


class ModelScopeDriver(Driver):
    """Browse a ModelScope model or dataset repository.

    Listing and link resolution try several URL variants (resource segment
    alias, revision fallback, GET then POST) and return the first success.

    :param model_id: Repository identifier, e.g. ``"org/name"`` (required, non-empty).
    :param resource_type: ``"model"`` or ``"dataset"``.
    :param revision: Branch or tag to browse.
    :param default_root: Subpath listed instead of the repository root.
    :param base_url: API endpoint.
    :param session: Optional ``requests.Session``; closed by its owner, not the driver.
    :raises ValueError: If the configuration is invalid.
    """

    def __init__(
        self,
        model_id: str,
        *,
        resource_type: str | ResourceKind = ResourceKind.MODEL,
        revision: str = DEFAULT_REVISION,
        default_root: str = "",
        base_url: str = API_ENDPOINT,
        session: requests.Session | None = None,
    ) -> None:
        self._config = ModelScopeConfig(
            model_id=model_id,
            resource_type=resource_type,  # type: ignore[arg-type]
            revision=revision,
            default_root=default_root,
            base_url=base_url,
        )
        self._session_instance: Any = session
        self._owns_session = session is None

    @classmethod
    def from_config(cls, config: ModelScopeConfig, *, session: requests.Session | None = None) -> ModelScopeDriver:
        return cls(
            config.model_id,
            resource_type=config.resource_type,
            revision=config.revision,
            default_root=config.default_root,
            base_url=config.base_url,
            session=session,
        )

    def __repr__(self) -> str:
        cfg = self._config
        return (
            f"ModelScopeDriver(model_id={cfg.model_id!r}, "
            f"resource_type={cfg.resource_type.value!r}, revision={cfg.revision!r})"
        )

    @property
    def name(self) -> str:
        return _INFO.name

    @property
    def capabilities(self) -> CapabilitySet:
        return _CAPABILITIES

    @property
    def info(self) -> DriverInfo:
        return _INFO

    @property
    def config(self) -> ModelScopeConfig:
        return self._config

    def get_root_path(self) -> str:
        return self._config.model_id

    # region: lazy session

    @property
    def _session(self) -> Any:
        if self._session_instance is None:
            import requests

            self._session_instance = requests.Session()
        return self._session_instance

    # endregion

    # region: error mapping

    @contextmanager
    def _errors(self, context: CallContext, path: str = "") -> Iterator[None]:
        """Map requests exceptions to modelscope_store errors."""
        import requests

        try:
            yield
        except ModelScopeError:
            raise
        except requests.RequestException as exc:
            if context.cancelled:
                raise OperationCancelled("Operation cancelled", path=path, backend=self.name) from exc
            log.error("modelscope request error: %s", exc)
            raise BackendUnavailable(str(exc), path=path, backend=self.name) from exc

    def _status_error(
        self, response: requests.Response, path: str, what: str, *, level: int = logging.ERROR
    ) -> ModelScopeError:
        """Classify a non-success HTTP status, logging it at ``level``."""
        status = response.status_code
        log.log(
            level,
            "modelscope %s response status error: %d, body: %s",
            what,
            status,
            response.text[:_BODY_LOG_LIMIT],
        )
        message = f"failed to {what}: status code {status}"
        if status == 404:
            return NotFound(message, path=path, backend=self.name)
        if status in (401, 403):
            return PermissionDenied(message, path=path, backend=self.name)
        return RemoteApiError(message, path=path, backend=self.name, status_code=status)

    # endregion

    # region: HTTP helpers

    def _api_url(self, segment: str, suffix: str = "") -> str:
        url = f"{self._config.base_url}/api/v1/{segment}/{self._config.model_id}/repo"
        return f"{url}/{suffix}" if suffix else url

    def _request(
        self,
        method: str,
        url: str,
        context: CallContext,
        *,
        path: str = "",
        params: QueryParams | None = None,
        body: JSONObject | None = None,
        allow_redirects: bool = True,
    ) -> requests.Response:
        timeout = context.request_timeout(backend=self.name, path=path)
        log.info("ModelScope %s %s params=%s body=%s", method, url, params, body)
        with self._errors(context, path):
            response: requests.Response = self._session.request(
                method,
                url,
                params=params,
                json=body,
                allow_redirects=allow_redirects,
                timeout=timeout,
            )
        return response

    def _decode_listing(self, response: requests.Response, path: str) -> FileListResult:
        """Decode a listing envelope, rejecting non-200 or unsuccessful answers."""
        if response.status_code != 200:
            raise self._status_error(response, path, "list files")
        try:
            data = response.json()
        except ValueError as exc:
            log.error("modelscope list api unmarshal error: %s, body: %s", exc, response.text[:_BODY_LOG_LIMIT])
            raise ResponseDecodeError(f"Malformed JSON response: {exc}", path=path, backend=self.name) from exc
        if not isinstance(data, dict):
            raise ResponseDecodeError("Expected a JSON object response", path=path, backend=self.name)
        result = FileListResult.from_dict(data)
        if not result.is_successful:
            log.error("modelscope list api logic error: %s (RequestId: %s)", result.message, result.request_id)
            raise RemoteApiError(
                f"modelscope api error: {result.message}",
                path=path,
                backend=self.name,
                status_code=response.status_code,
                code=result.code,
                request_id=result.request_id,
            )
        return result

    def _to_objects(self, result: FileListResult, rel: str, *, joined: bool = False) -> list[StorageObject]:
        """Map listing entries; with ``joined`` paths are built from ``rel`` and the entry name."""
        try:
            return [
                StorageObject.from_entry(entry, path=join(rel, entry.name) if joined else None)
                for entry in result.entries
            ]
        except (ValueError, OverflowError, OSError) as exc:
            log.error("modelscope list api entry error: %s (RequestId: %s)", exc, result.request_id)
            raise ResponseDecodeError(f"Invalid entry in listing: {exc}", path=rel, backend=self.name) from exc

    # endregion

    # region: listing

    def list_dir(self, path: str = "", *, context: CallContext | None = None) -> list[StorageObject]:
        ctx = context or BACKGROUND
        root = self.get_root_path()
        if self._config.default_root and is_root(path, root):
            path = self._config.default_root
        rel = strip_root(path, root)
        if self._config.is_dataset:
            return self._list_tree(rel, ctx)
        return self._list_files(rel, ctx)

    def _list_files(self, rel: str, context: CallContext) -> list[StorageObject]:
        def attempt(candidate: Candidate) -> list[StorageObject]:
            url = self._api_url(candidate.segment, "files")
            params: QueryParams = {"Revision": candidate.revision, "Recursive": "false", "Root": rel}
            response = self._request("GET", url, context, path=rel, params=params)
            if response.status_code in _POST_FALLBACK_STATUSES:
                log.warning("ModelScope GET %s returned %d, retrying as POST", url, response.status_code)
                body: JSONObject = {"Revision": candidate.revision, "Recursive": False, "Root": rel}
                response = self._request("POST", url, context, path=rel, body=body)
            result = self._decode_listing(response, rel)
            return self._to_objects(result, rel)

        candidates = build_candidates(self._config.resource_type, self._config.revision)
        return run_cascade(candidates, attempt, context=context, operation="list", path=rel, backend=self.name)

    def _list_tree(self, rel: str, context: CallContext) -> list[StorageObject]:
        def attempt(candidate: Candidate) -> list[StorageObject]:
            url = self._api_url(candidate.segment, "tree")
            params: QueryParams = {
                "Revision": candidate.revision,
                candidate.param: rel,
                "PageNumber": 1,
                "PageSize": _TREE_PAGE_SIZE,
            }
            response = self._request("GET", url, context, path=rel, params=params)
            result = self._decode_listing(response, rel)
            return self._to_objects(result, rel, joined=True)

        candidates = build_candidates(self._config.resource_type, self._config.revision, _TREE_PARAMS)
        return run_cascade(candidates, attempt, context=context, operation="list tree", path=rel, backend=self.name)

    # endregion

    # region: links

    def link(
        self,
        file: StorageObject | str,
        *,
        redirect: bool = False,
        context: CallContext | None = None,
    ) -> Link:
        ctx = context or BACKGROUND
        file_path = file.path if isinstance(file, StorageObject) else file
        if self._config.is_dataset:
            file_path = strip_root(file_path, self.get_root_path())
        else:
            file_path = normalize(file_path)
        if not file_path:
            raise InvalidPath("Path must not be empty for links", path=file_path, backend=self.name)

        def attempt(candidate: Candidate) -> Link:
            endpoint = self._api_url(candidate.segment)
            query = urlencode({"Revision": candidate.revision, "FilePath": file_path}, quote_via=quote)
            api_url = f"{endpoint}?{query}"
            try:
                response = self._request("GET", api_url, ctx, path=file_path, allow_redirects=False)
            except OperationCancelled:
                raise
            except BackendUnavailable as exc:
                error: ModelScopeError = exc
                retry_post = True
            else:
                found = self._resolve_link(response, api_url, redirect)
                if found is not None:
                    return found
                retry_post = response.status_code in _POST_FALLBACK_STATUSES
                error = self._link_error(response, file_path, level=logging.WARNING if retry_post else logging.ERROR)
            if not retry_post:
                raise error
            log.warning("ModelScope GET %s failed (%s), retrying as POST", api_url, error)
            body: JSONObject = {"Revision": candidate.revision, "FilePath": file_path}
            response = self._request("POST", endpoint, ctx, path=file_path, body=body, allow_redirects=False)
            found = self._resolve_link(response, api_url, redirect)
            if found is not None:
                return found
            raise self._link_error(response, file_path)

        candidates = build_candidates(self._config.resource_type, self._config.revision)
        return run_cascade(candidates, attempt, context=ctx, operation="link", path=file_path, backend=self.name)

    @staticmethod
    def _resolve_link(response: requests.Response, api_url: str, redirect: bool) -> Link | None:
        """Turn a 302/200 answer into a link; ``None`` for anything else."""
        if response.status_code == 302:
            location = response.headers.get("Location", "")
            if not location:
                return None
            return Link(url=location if redirect else api_url)
        if response.status_code == 200:
            return Link(url=api_url)
        return None

    def _link_error(self, response: requests.Response, path: str, *, level: int = logging.ERROR) -> ModelScopeError:
        if response.status_code == 302:
            log.error("modelscope link api error: Location header not found in 302 redirect response")
            return RemoteApiError(
                "failed to get download link: Location header not found",
                path=path,
                backend=self.name,
                status_code=302,
            )
        return self._status_error(response, path, "get download link", level=level)

    # endregion

    # region: unsupported operations

    def _unsupported(self, cap: Capability, path: str | None = None) -> NoReturn:
        self.capabilities.require(cap, backend=self.name, path=path)
        raise CapabilityNotSupported(  # pragma: no cover -- mutating capabilities are never declared
            f"Operation '{cap.value}' is not implemented",
            capability=cap.value,
            backend=self.name,
            path=path,
        )

    def make_dir(self, parent: str, name: str) -> StorageObject:
        self._unsupported(Capability.MAKE_DIR, parent)

    def move(self, src: str, dst_dir: str) -> StorageObject:
        self._unsupported(Capability.MOVE, src)

    def rename(self, src: str, new_name: str) -> StorageObject:
        self._unsupported(Capability.RENAME, src)

    def copy(self, src: str, dst_dir: str) -> StorageObject:
        self._unsupported(Capability.COPY, src)

    def remove(self, path: str) -> None:
        self._unsupported(Capability.REMOVE, path)

    def put(self, dst_dir: str, name: str, content: WritableContent) -> StorageObject:
        self._unsupported(Capability.PUT, dst_dir)

    def get_archive_meta(self, path: str, *, password: str = "") -> dict[str, object]:
        self._unsupported(Capability.ARCHIVE_META, path)

    def list_archive(self, path: str, inner_path: str = "", *, password: str = "") -> list[StorageObject]:
        self._unsupported(Capability.ARCHIVE_LIST, path)

    def extract(self, path: str, inner_path: str, *, password: str = "") -> Link:
        self._unsupported(Capability.ARCHIVE_EXTRACT, path)

    def archive_decompress(self, src: str, dst_dir: str, *, inner_path: str = "") -> list[StorageObject]:
        self._unsupported(Capability.ARCHIVE_DECOMPRESS, src)

    # endregion

    # region: lifecycle

    def close(self) -> None:
        if self._session_instance is not None and self._owns_session:
            self._session_instance.close()
            self._session_instance = None

    # endregion
