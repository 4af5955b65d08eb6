"""Tests for explicit driver registration and mounting."""

from __future__ import annotations

import pytest

from modelscope_store._config import MountConfig, RegistryConfig
from modelscope_store._registry import Registry, register_builtin_drivers
from modelscope_store.drivers._modelscope import ModelScopeDriver


def _make_config() -> RegistryConfig:
    return RegistryConfig(
        mounts={
            "models": MountConfig(type="modelscope", options={"model_id": "org/model"}),
            "data": MountConfig(type="modelscope", options={"model_id": "org/data", "resource_type": "dataset"}),
        }
    )


def _registry() -> Registry:
    reg = Registry(_make_config())
    register_builtin_drivers(reg)
    return reg


def test_registry_validates_on_construction() -> None:
    with pytest.raises(ValueError, match="broken"):
        Registry(RegistryConfig(mounts={"broken": MountConfig(type="")}))


def test_nothing_registered_implicitly() -> None:
    reg = Registry(_make_config())
    assert reg.types == []
    with pytest.raises(ValueError, match="Unknown driver type 'modelscope'"):
        reg.get_driver("models")


def test_register_builtin_drivers() -> None:
    assert _registry().types == ["modelscope"]


def test_registries_are_independent() -> None:
    a = _registry()
    b = Registry()
    assert a.types == ["modelscope"]
    assert b.types == []


def test_duplicate_registration_rejected() -> None:
    reg = _registry()
    with pytest.raises(ValueError, match="already registered"):
        reg.register("modelscope", ModelScopeDriver)


def test_get_driver_returns_configured_driver() -> None:
    reg = _registry()
    d = reg.get_driver("data")
    assert isinstance(d, ModelScopeDriver)
    assert d.get_root_path() == "org/data"
    assert d.config.is_dataset is True


def test_get_driver_unknown_mount() -> None:
    with pytest.raises(KeyError, match="unknown_mount"):
        _registry().get_driver("unknown_mount")


def test_lazy_instantiation_and_reuse() -> None:
    reg = _registry()
    assert len(reg._drivers) == 0
    first = reg.get_driver("models")
    assert reg.get_driver("models") is first
    assert len(reg._drivers) == 1


def test_invalid_options_raise_value_error() -> None:
    reg = Registry(RegistryConfig(mounts={"bad": MountConfig(type="modelscope", options={"bucket": "x"})}))
    register_builtin_drivers(reg)
    with pytest.raises(ValueError, match="Invalid options for mount 'bad'"):
        reg.get_driver("bad")


def test_invalid_config_values_raise_value_error() -> None:
    reg = Registry(RegistryConfig(mounts={"bad": MountConfig(type="modelscope", options={"model_id": ""})}))
    register_builtin_drivers(reg)
    with pytest.raises(ValueError, match="model_id is required"):
        reg.get_driver("bad")


def test_custom_factory() -> None:
    reg = Registry(RegistryConfig(mounts={"pinned": MountConfig(type="pinned")}))
    reg.register("pinned", lambda: ModelScopeDriver("org/model", revision="v1"))
    d = reg.get_driver("pinned")
    assert isinstance(d, ModelScopeDriver)
    assert d.config.revision == "v1"


def test_close_clears_drivers() -> None:
    reg = _registry()
    reg.get_driver("models")
    reg.close()
    assert len(reg._drivers) == 0


def test_context_manager() -> None:
    with _registry() as reg:
        reg.get_driver("models")
    assert len(reg._drivers) == 0


def test_repr_lists_mounts() -> None:
    assert "models" in repr(_registry())


def test_non_string_resource_type_raises_value_error() -> None:
    options = {"model_id": "org/model", "resource_type": 5}
    reg = Registry(RegistryConfig(mounts={"bad": MountConfig(type="modelscope", options=options)}))
    register_builtin_drivers(reg)
    with pytest.raises(ValueError, match="unsupported resource_type"):
        reg.get_driver("bad")
