from __future__ import annotations

from flask import Flask, abort, flash, redirect, render_template, request, url_for

from ..auth.middleware import role_required
from ..container import Container
from ..core.enums import AccountType, Outcome
from ..core.exceptions import NotFoundError
from .forms import sticky_item_values

_STATUS = {Outcome.CONFLICT: 409, Outcome.VALIDATION_FAILED: 400, Outcome.NOT_FOUND: 404}

staff_required = role_required(AccountType.EMPLOYEE, AccountType.ADMIN)


def register(app: Flask, container: Container) -> None:
    inventory = container.inventory_service

    def _render_item_form(template: str, title: str, values: dict, errors=(), status: int = 200, **extra):
        return (
            render_template(
                template,
                title=title,
                classifications=inventory.list_classifications(),
                errors=list(errors),
                **values,
                **extra,
            ),
            status,
        )

    @app.route("/inv/", endpoint="inv_management")
    @staff_required
    def management():
        return render_template(
            "inventory/management.html",
            title="Inventory Management",
            classifications=inventory.list_classifications(),
        )

    @app.route("/inv/type/<classification_name>", endpoint="inv_by_classification")
    def by_classification(classification_name: str):
        vehicles = inventory.list_by_classification(classification_name)
        return render_template(
            "inventory/classification.html",
            title=f"{classification_name} Vehicles",
            classification_name=classification_name,
            vehicles=vehicles,
        )

    @app.route("/inv/detail/<int:inv_id>", endpoint="inv_detail")
    def detail(inv_id: int):
        try:
            vehicle = inventory.get_detail(inv_id)
        except NotFoundError:
            abort(404)
        return render_template("inventory/detail.html", title=vehicle.title, vehicle=vehicle)

    @app.route("/inv/add-classification", methods=["GET", "POST"], endpoint="inv_add_classification")
    @staff_required
    def add_classification():
        if request.method == "POST":
            result = inventory.add_classification(name=request.form.get("classification_name", ""))
            if result.outcome == Outcome.CREATED:
                flash(result.notice, "success")
                return redirect(url_for("inv_management"))

            flash(result.notice, "danger")
            return (
                render_template(
                    "inventory/add_classification.html",
                    title="Add New Classification",
                    errors=list(result.errors),
                    **result.values,
                ),
                _STATUS[result.outcome],
            )

        return render_template(
            "inventory/add_classification.html", title="Add New Classification", errors=[], classification_name=""
        )

    @app.route("/inv/add-inventory", methods=["GET", "POST"], endpoint="inv_add_inventory")
    @staff_required
    def add_inventory():
        if request.method == "POST":
            result = inventory.add_inventory_item(request.form)
            if result.outcome == Outcome.CREATED:
                flash(result.notice, "success")
                return redirect(url_for("inv_management"))

            flash(result.notice, "danger")
            return _render_item_form(
                "inventory/add_inventory.html",
                "Add New Inventory Item",
                dict(result.values),
                result.errors,
                _STATUS[result.outcome],
            )

        return _render_item_form("inventory/add_inventory.html", "Add New Inventory Item", sticky_item_values({}))

    @app.route("/inv/edit/<int:inv_id>", methods=["GET", "POST"], endpoint="inv_edit")
    @staff_required
    def edit_inventory(inv_id: int):
        try:
            vehicle = inventory.get_detail(inv_id)
        except NotFoundError:
            abort(404)

        if request.method == "POST":
            result = inventory.update_inventory_item(inv_id, request.form)
            if result.outcome == Outcome.UPDATED:
                flash(result.notice, "success")
                return redirect(url_for("inv_detail", inv_id=inv_id))

            flash(result.notice, "danger")
            return _render_item_form(
                "inventory/edit_inventory.html",
                f"Edit {vehicle.title}",
                dict(result.values),
                result.errors,
                _STATUS[result.outcome],
                inv_id=inv_id,
            )

        values = sticky_item_values(
            {
                "inv_make": vehicle.inv_make,
                "inv_model": vehicle.inv_model,
                "inv_year": str(vehicle.inv_year),
                "inv_description": vehicle.inv_description,
                "inv_image": vehicle.inv_image,
                "inv_thumbnail": vehicle.inv_thumbnail,
                "inv_price": str(vehicle.inv_price),
                "inv_miles": str(vehicle.inv_miles),
                "inv_color": vehicle.inv_color,
                "classification_id": str(vehicle.classification_id),
            }
        )
        return _render_item_form("inventory/edit_inventory.html", f"Edit {vehicle.title}", values, inv_id=inv_id)
