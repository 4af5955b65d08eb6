"""Read-only storage driver for ModelScope model and dataset repositories."""

from modelscope_store._capabilities import Capability, CapabilitySet
from modelscope_store._config import ModelScopeConfig, MountConfig, RegistryConfig, ResourceKind
from modelscope_store._context import CallContext
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
    StrategiesExhausted,
)
from modelscope_store._models import DriverInfo, FileListResult, Link, RemoteEntry, StorageObject
from modelscope_store._registry import Registry, register_builtin_drivers
from modelscope_store.drivers._modelscope import ModelScopeDriver

__version__ = "0.1.0"

__all__ = [
    # Core
    "Driver",
    "ModelScopeDriver",
    "Registry",
    "register_builtin_drivers",
    "CallContext",
    # Models
    "StorageObject",
    "Link",
    "DriverInfo",
    "RemoteEntry",
    "FileListResult",
    # Capabilities
    "Capability",
    "CapabilitySet",
    # Config
    "ModelScopeConfig",
    "ResourceKind",
    "MountConfig",
    "RegistryConfig",
    # Errors
    "ModelScopeError",
    "NotFound",
    "PermissionDenied",
    "InvalidPath",
    "CapabilityNotSupported",
    "RemoteApiError",
    "ResponseDecodeError",
    "BackendUnavailable",
    "OperationCancelled",
    "StrategiesExhausted",
    # Version
    "__version__",
]
