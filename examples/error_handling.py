"""Error handling: catching NotFound, CapabilityNotSupported, cancellation, etc.

Demonstrates the normalized error hierarchy and how to handle errors
programmatically using structured attributes.
"""

from __future__ import annotations

import threading

from modelscope_store import (
    CallContext,
    CapabilityNotSupported,
    InvalidPath,
    ModelScopeDriver,
    ModelScopeError,
    NotFound,
    OperationCancelled,
    RemoteApiError,
)

if __name__ == "__main__":
    with ModelScopeDriver("Qwen/Qwen2.5-0.5B-Instruct") as driver:
        # --- NotFound: every URL variant answered 404 ---
        try:
            driver.link("does-not-exist.bin")
        except NotFound as exc:
            print(f"NotFound: {exc}")
            print(f"  path={exc.path}, backend={exc.backend}")

        # --- RemoteApiError: the API answered but reported a failure ---
        try:
            ModelScopeDriver("no-such-org/no-such-model").list_dir("")
        except RemoteApiError as exc:
            print(f"\nRemoteApiError: {exc}")
            print(f"  status_code={exc.status_code}, request_id={exc.request_id!r}")
        except ModelScopeError as exc:
            print(f"\n{type(exc).__name__}: {exc}")

        # --- CapabilityNotSupported: the driver is read-only ---
        try:
            driver.remove("config.json")
        except CapabilityNotSupported as exc:
            print(f"\nCapabilityNotSupported: {exc}")
            print(f"  capability={exc.capability}")

        # --- InvalidPath (path traversal attempt) ---
        try:
            driver.list_dir("../../etc")
        except InvalidPath as exc:
            print(f"\nInvalidPath: {exc}")

        # --- OperationCancelled: the caller gave up before the call started ---
        cancel = threading.Event()
        cancel.set()
        try:
            driver.list_dir("", context=CallContext(cancel_event=cancel))
        except OperationCancelled as exc:
            print(f"\nOperationCancelled: {exc}")

    print("\nDone!")
