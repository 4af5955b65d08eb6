"""Configuration: config-as-code, from_dict(), datasets and default roots.

Demonstrates different ways to describe ModelScope mounts. Nothing here
touches the network; drivers are only constructed.
"""

from __future__ import annotations

from modelscope_store import (
    ModelScopeConfig,
    ModelScopeDriver,
    MountConfig,
    Registry,
    RegistryConfig,
    register_builtin_drivers,
)

if __name__ == "__main__":
    # --- Option 1: Config-as-code with Python objects ---
    config = RegistryConfig(
        mounts={
            "model": MountConfig(
                type="modelscope",
                options={"model_id": "Qwen/Qwen2.5-0.5B-Instruct", "revision": "master"},
            ),
            "dataset": MountConfig(
                type="modelscope",
                options={
                    "model_id": "modelscope/chinese-poetry-collection",
                    "resource_type": "dataset",
                    "default_root": "data",
                },
            ),
        },
    )

    with Registry(config) as registry:
        register_builtin_drivers(registry)
        for name in ("model", "dataset"):
            driver = registry.get_driver(name)
            print(f"{name}: {driver!r}")

    # --- Option 2: from_dict(), e.g. loaded from TOML or JSON ---
    raw = {
        "mounts": {
            "hub": {"type": "modelscope", "options": {"model_id": "org/model", "revision": "v1.0"}},
        },
    }
    with Registry(RegistryConfig.from_dict(raw)) as registry:
        register_builtin_drivers(registry)
        print(f"\nfrom_dict(): {registry.get_driver('hub')!r}")

    # --- Option 3: the host's JSON form for a single driver ---
    settings = ModelScopeConfig.from_dict({"model_id": "org/data", "resource_type": "Dataset"})
    driver = ModelScopeDriver.from_config(settings)
    print(f"\nfrom_config(): {driver!r}, root={driver.get_root_path()!r}")

    # --- Validation: bad settings raise ValueError at construction ---
    for bad in ({"model_id": ""}, {"model_id": "org/x", "resource_type": "space"}):
        try:
            ModelScopeConfig.from_dict(bad)
        except ValueError as exc:
            print(f"Validation error: {exc}")

    print("\nDone!")
