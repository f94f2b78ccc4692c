"""CSE Motors dealership package.

Feature modules (accounts, auth, inventory, home) each carry a thin Flask
controller layer on top of plain service and repository layers.
"""
