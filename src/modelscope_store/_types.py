"""Type aliases used throughout modelscope_store."""

from __future__ import annotations

from typing import Any, BinaryIO

WritableContent = BinaryIO | bytes
JSONObject = dict[str, Any]
QueryParams = dict[str, object]
