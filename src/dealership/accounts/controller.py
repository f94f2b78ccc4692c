from __future__ import annotations

from flask import Flask, abort, flash, make_response, redirect, render_template, request, url_for

from ..auth.middleware import clear_credential, current_auth, guest_only, login_required, write_credential
from ..container import Container
from ..core.enums import Outcome

_STATUS = {
    Outcome.CONFLICT: 409,
    Outcome.VALIDATION_FAILED: 400,
    Outcome.INVALID_CREDENTIALS: 400,
    Outcome.MISMATCH: 400,
    Outcome.NOT_FOUND: 404,
}


def register(app: Flask, container: Container) -> None:
    accounts = container.account_service
    issuer = container.issuer

    def _render_update_form(values: dict, errors=(), status: int = 200):
        return render_template("account/update.html", title="Edit Account", errors=list(errors), **values), status

    @app.route("/account/login", methods=["GET"], endpoint="account_login")
    @guest_only
    def login_form():
        return render_template("account/login.html", title="Login", errors=[], email="")

    @app.route("/account/login", methods=["POST"], endpoint="account_login_post")
    def login():
        result = accounts.login(
            email=request.form.get("account_email", ""),
            password=request.form.get("account_password", ""),
        )
        if result.outcome == Outcome.AUTHENTICATED:
            return write_credential(make_response(redirect(url_for("account_dashboard"))), issuer, result.credential)

        flash(result.notice, "danger")
        return render_template("account/login.html", title="Login", errors=list(result.errors), **result.values), _STATUS[result.outcome]

    @app.route("/account/register", methods=["GET"], endpoint="account_register")
    @guest_only
    def register_form():
        return render_template("account/register.html", title="Register", errors=[], firstname="", lastname="", email="")

    @app.route("/account/register", methods=["POST"], endpoint="account_register_post")
    def register_account():
        result = accounts.register(
            firstname=request.form.get("account_firstname", ""),
            lastname=request.form.get("account_lastname", ""),
            email=request.form.get("account_email", ""),
            password=request.form.get("account_password", ""),
        )
        if result.outcome == Outcome.CREATED:
            flash(result.notice, "success")
            return redirect(url_for("account_login"))

        flash(result.notice, "danger")
        return render_template("account/register.html", title="Register", errors=list(result.errors), **result.values), _STATUS[result.outcome]

    @app.route("/account/", endpoint="account_dashboard")
    @login_required
    def dashboard():
        return render_template("account/dashboard.html", title="Account Management")

    @app.route("/account/update", methods=["GET"], endpoint="account_update")
    @login_required
    def update_form():
        account = accounts.get_account(current_auth().identity.account_id)
        if account is None:
            abort(404)
        return _render_update_form({"firstname": account.firstname, "lastname": account.lastname, "email": account.email})

    @app.route("/account/update", methods=["POST"], endpoint="account_update_post")
    @login_required
    def update_profile():
        auth = current_auth()
        result = accounts.update_profile(
            identity=auth.identity,
            firstname=request.form.get("account_firstname", ""),
            lastname=request.form.get("account_lastname", ""),
            email=request.form.get("account_email", ""),
            credential=auth.credential,
        )
        if result.outcome == Outcome.UPDATED:
            flash(result.notice, "success")
            return write_credential(make_response(redirect(url_for("account_update"))), issuer, result.credential)

        flash(result.notice, "danger")
        return _render_update_form(dict(result.values), result.errors, _STATUS[result.outcome])

    @app.route("/account/updatePassword", methods=["POST"], endpoint="account_update_password")
    @login_required
    def update_password():
        auth = current_auth()
        result = accounts.change_password(
            identity=auth.identity,
            current_password=request.form.get("current_password", ""),
            password=request.form.get("account_password", ""),
            confirmation=request.form.get("confirm_password", ""),
            credential=auth.credential,
        )
        if result.outcome == Outcome.UPDATED:
            flash(result.notice, "success")
            return write_credential(make_response(redirect(url_for("account_update"))), issuer, result.credential)

        flash(result.notice, "danger")
        identity = auth.identity
        values = {"firstname": identity.firstname, "lastname": identity.lastname, "email": identity.email}
        return _render_update_form(values, result.errors, _STATUS[result.outcome])

    @app.route("/account/logout", endpoint="account_logout")
    def logout():
        result = accounts.logout(credential=request.cookies.get(issuer.cookie_name))
        flash(result.notice, "info")
        return clear_credential(make_response(redirect(url_for("home"))), issuer)
