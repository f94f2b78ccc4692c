from __future__ import annotations

import importlib

from config import get_settings_module

from dealership.container import build_container
from dealership.logging_setup import configure_logging


def main() -> None:
    configure_logging()
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)
    changed = container.inventory_service.normalize_image_paths()
    print(f"OK: normalized image paths for {changed} vehicles")


if __name__ == "__main__":
    main()
