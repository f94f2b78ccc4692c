"""Example: use the service layer directly (no Flask).

Controllers are thin; the rules live in the services.
"""

import importlib
import sys

from config import get_settings_module

from dealership.container import build_container


def main(classification: str = "SUV"):
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)
    for vehicle in container.inventory_service.list_by_classification(classification):
        print(vehicle.inv_id, vehicle.title, vehicle.inv_price)


if __name__ == "__main__":
    main(*sys.argv[1:2])
