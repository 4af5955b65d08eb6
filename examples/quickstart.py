"""Quickstart: browse a public ModelScope model and resolve a download link.

Demonstrates:
- Registering the built-in driver with a Registry
- Listing the repository root and a subdirectory
- Resolving a stable API link and the redirect target
"""

from __future__ import annotations

import logging

from modelscope_store import MountConfig, Registry, RegistryConfig, register_builtin_drivers

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    config = RegistryConfig(
        mounts={"qwen": MountConfig(type="modelscope", options={"model_id": "Qwen/Qwen2.5-0.5B-Instruct"})},
    )

    with Registry(config) as registry:
        register_builtin_drivers(registry)
        driver = registry.get_driver("qwen")

        # List the repository root
        for obj in driver.list_dir(driver.get_root_path()):
            kind = "dir " if obj.is_dir else "file"
            print(f"{kind} {obj.path:<40} {obj.size:>12} {obj.modified_at:%Y-%m-%d}")

        # Stable API URL (no request is followed)
        print(f"Link: {driver.link('config.json').url}")

        # Final CDN URL behind the redirect
        print(f"Redirect: {driver.link('config.json', redirect=True).url}")

    print("Done!")
