from __future__ import annotations

import logging

from flask import Flask, render_template

from ..container import Container

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Sorry, we can't find that page."
SERVER_ERROR_MESSAGE = "Oh no! There was a crash. Maybe try a different route?"


def register(app: Flask, container: Container) -> None:
    inventory = container.inventory_service

    @app.context_processor
    def _inject_navigation():
        # Re-read on every render; there is no cross-request cache.
        return {"nav_classifications": inventory.navigation()}

    @app.route("/", endpoint="home")
    def home():
        return render_template("index.html", title="Home")

    @app.route("/trigger-error", endpoint="trigger_error")
    def trigger_error():
        raise RuntimeError("This is a simulated server error!")

    @app.errorhandler(404)
    def not_found(_error):
        return render_template("errors/error.html", title="404 Not Found", message=NOT_FOUND_MESSAGE), 404

    @app.errorhandler(500)
    def server_error(error):
        original = getattr(error, "original_exception", None) or error
        logger.error("Unhandled error: %s", original, exc_info=original)
        # Never show exception text to the client.
        return render_template("errors/error.html", title="Server Error", message=SERVER_ERROR_MESSAGE), 500
