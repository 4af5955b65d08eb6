"""Configuration model: immutable data containers describing drivers and mounts."""

from __future__ import annotations

import dataclasses
import enum
from typing import Any

from modelscope_store._path import trim_slashes

API_ENDPOINT = "https://www.modelscope.cn"
DEFAULT_REVISION = "master"


class ResourceKind(enum.Enum):
    """Kind of repository hosted on ModelScope."""

    MODEL = "model"
    DATASET = "dataset"

    @classmethod
    def parse(cls, value: str | ResourceKind | None) -> ResourceKind:
        """Parse a kind name case-insensitively; blank means ``MODEL``.

        :raises ValueError: If the name is not a known kind.
        """
        if isinstance(value, ResourceKind):
            return value
        if value is not None and not isinstance(value, str):
            raise ValueError(f"unsupported resource_type: {value!r}")
        name = (value or "").strip().lower()
        if not name:
            return cls.MODEL
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"unsupported resource_type: {name}") from None


@dataclasses.dataclass(frozen=True)
class ModelScopeConfig:
    """Validated settings of one ModelScope repository mount.

    Values are normalized on construction, so two configs built from the same
    inputs compare equal.

    :param model_id: Repository identifier, e.g. ``"org/name"`` (required).
    :param resource_type: ``"model"`` or ``"dataset"`` (default ``"model"``).
    :param revision: Branch or tag to browse (default ``"master"``).
    :param default_root: Subpath listed when the repository root is browsed.
    :param base_url: API endpoint.
    :raises ValueError: If ``model_id`` is empty or ``resource_type`` is unknown.
    """

    model_id: str
    resource_type: ResourceKind = ResourceKind.MODEL
    revision: str = DEFAULT_REVISION
    default_root: str = ""
    base_url: str = API_ENDPOINT

    def __post_init__(self) -> None:
        model_id = (self.model_id or "").strip()
        if not model_id:
            raise ValueError("model_id is required")
        object.__setattr__(self, "model_id", model_id)
        object.__setattr__(self, "resource_type", ResourceKind.parse(self.resource_type))
        object.__setattr__(self, "revision", (self.revision or "").strip() or DEFAULT_REVISION)
        object.__setattr__(self, "default_root", trim_slashes(self.default_root or ""))
        object.__setattr__(self, "base_url", (self.base_url or API_ENDPOINT).strip().rstrip("/"))

    @property
    def is_dataset(self) -> bool:
        return self.resource_type is ResourceKind.DATASET

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModelScopeConfig:
        """Construct from the host's JSON form (``model_id``, ``resource_type``, ...)."""
        return cls(
            model_id=str(data.get("model_id", "")),
            resource_type=data.get("resource_type") or ResourceKind.MODEL,
            revision=str(data.get("revision") or DEFAULT_REVISION),
            default_root=str(data.get("default_root") or ""),
            base_url=str(data.get("base_url") or API_ENDPOINT),
        )


@dataclasses.dataclass(frozen=True)
class MountConfig:
    """Describes one driver instance mounted by the host.

    :param type: Registered driver type (e.g. ``"modelscope"``).
    :param options: Keyword options passed to the driver constructor.
    """

    type: str
    options: dict[str, object] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class RegistryConfig:
    """Top-level configuration container.

    :param mounts: Mapping of mount names to their configs.
    """

    mounts: dict[str, MountConfig] = dataclasses.field(default_factory=dict)

    def validate(self) -> None:
        """Validate that every mount names a driver type.

        :raises ValueError: If a mount has an empty type.
        """
        for mount_name, mount in self.mounts.items():
            if not mount.type.strip():
                raise ValueError(f"Mount '{mount_name}' does not name a driver type")

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> RegistryConfig:
        """Construct from a plain dict (e.g. parsed TOML/JSON).

        :param data: Dict with a ``mounts`` key.
        """
        raw_mounts = data.get("mounts", {})
        if not isinstance(raw_mounts, dict):
            msg = "Expected 'mounts' to be a dict"
            raise TypeError(msg)

        mounts: dict[str, MountConfig] = {}
        for name, cfg in raw_mounts.items():
            if not isinstance(cfg, dict):
                msg = f"Mount config for '{name}' must be a dict"
                raise TypeError(msg)
            mounts[str(name)] = MountConfig(
                type=str(cfg["type"]),
                options=dict(cfg.get("options", {})),
            )
        return cls(mounts=mounts)
