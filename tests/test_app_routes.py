from datetime import timedelta

import pytest

from dealership.auth.token_issuer import SignedTokenIssuer
from dealership.common.datetime_utils import now_utc
from dealership.core.enums import AccountType

from conftest import STRONG_PASSWORD, TOKEN_SECRET, Clock


def _cookie(client, name):
    cookie = client.get_cookie(name)
    return cookie.value if cookie else None


def _register(client, email="jane@example.com", **extra):
    form = {
        "account_firstname": "Jane",
        "account_lastname": "Doe",
        "account_email": email,
        "account_password": STRONG_PASSWORD,
    }
    form.update(extra)
    return client.post("/account/register", data=form, follow_redirects=True)


def test_home_lists_classifications_in_nav(client, inventory_repo):
    inventory_repo.create_classification(name="Sedan")
    inventory_repo.create_classification(name="Truck")

    resp = client.get("/")

    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "/inv/type/Sedan" in html
    assert "/inv/type/Truck" in html


def test_register_then_duplicate(client, accounts_repo):
    resp = _register(client)

    assert resp.status_code == 200
    assert "Congratulations Jane, you are now registered. Please log in." in resp.get_data(as_text=True)
    assert len(accounts_repo.by_id) == 1

    resp = _register(client, email="JANE@example.com")

    assert resp.status_code == 409
    html = resp.get_data(as_text=True)
    assert "Email already exists." in html
    assert 'value="Jane"' in html
    assert len(accounts_repo.by_id) == 1


def test_register_validation_errors_rerender(client, accounts_repo):
    resp = _register(client, account_password="weak")

    assert resp.status_code == 400
    assert "Password must be at least 10 characters." in resp.get_data(as_text=True)
    assert accounts_repo.by_id == {}


def test_login_sets_httponly_cookie_and_opens_dashboard(client, app, make_account, login):
    make_account()
    issuer = app.extensions["dealership"].issuer

    resp = login()

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/account/")
    set_cookie = resp.headers.get("Set-Cookie")
    assert set_cookie.startswith(f"{issuer.cookie_name}=")
    assert "HttpOnly" in set_cookie
    assert "Max-Age=3600" in set_cookie

    html = client.get("/account/").get_data(as_text=True)
    assert "Welcome Jane" in html
    assert "jane@example.com" in html


def test_bad_login_is_rejected_without_cookie(client, app, make_account, login):
    make_account()

    resp = login(password="Wrong123!@#x")

    assert resp.status_code == 400
    assert "Please check your credentials and try again." in resp.get_data(as_text=True)
    assert _cookie(client, app.extensions["dealership"].issuer.cookie_name) is None


def test_guest_pages_redirect_when_logged_in(client, make_account, login):
    make_account()
    login()

    for path in ("/account/login", "/account/register"):
        resp = client.get(path)
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/account/")


def test_update_profile_replaces_cookie(client, app, make_account, login, accounts_repo):
    account = make_account()
    login()
    name = app.extensions["dealership"].issuer.cookie_name
    before = _cookie(client, name)

    resp = client.post(
        "/account/update",
        data={"account_firstname": "Janet", "account_lastname": "Doe", "account_email": "janet@example.com"},
        follow_redirects=True,
    )

    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "Account information successfully updated." in html
    assert "Welcome Janet" in html
    assert _cookie(client, name) not in (None, before)
    assert accounts_repo.get_by_id(account.account_id).email == "janet@example.com"


def test_update_profile_conflict(client, make_account, login):
    make_account()
    make_account(email="john@example.com", firstname="John")
    login()

    resp = client.post(
        "/account/update",
        data={"account_firstname": "Jane", "account_lastname": "Doe", "account_email": "john@example.com"},
    )

    assert resp.status_code == 409
    assert "Email already exists. Please use a different email." in resp.get_data(as_text=True)


def test_change_password_then_login_with_new_one(client, make_account, login):
    make_account()
    login()

    resp = client.post(
        "/account/updatePassword",
        data={"current_password": STRONG_PASSWORD, "account_password": "New123!@#xy", "confirm_password": "New123!@#xy"},
        follow_redirects=True,
    )
    assert "Password successfully updated." in resp.get_data(as_text=True)

    client.get("/account/logout")
    assert login(password=STRONG_PASSWORD).status_code == 400
    assert login(password="New123!@#xy").status_code == 302


def test_change_password_mismatch(client, make_account, login):
    make_account()
    login()

    resp = client.post(
        "/account/updatePassword",
        data={"current_password": STRONG_PASSWORD, "account_password": "New123!@#xy", "confirm_password": "Other123!@#x"},
    )

    assert resp.status_code == 400
    assert "Passwords do not match." in resp.get_data(as_text=True)


def test_logout_twice_then_protected_route_redirects(client, app, make_account, login, sessions):
    make_account()
    login()
    name = app.extensions["dealership"].issuer.cookie_name

    first = client.get("/account/logout")
    second = client.get("/account/logout")

    assert first.status_code == second.status_code == 302
    assert first.headers["Location"].endswith("/")
    assert _cookie(client, name) is None
    assert sessions.rows == {}

    resp = client.get("/account/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/account/login")


def test_protected_route_flashes_login_notice(client):
    resp = client.get("/account/", follow_redirects=True)

    assert "Please log in." in resp.get_data(as_text=True)


def test_expired_credential_is_cleared_with_notice(client, app, issuer, sessions, make_account):
    snapshot = make_account().snapshot()
    if isinstance(issuer, SignedTokenIssuer):
        value = SignedTokenIssuer(TOKEN_SECRET, clock=Clock(now_utc() - timedelta(hours=2))).issue(snapshot).value
    else:
        sessions.save(session_id="stale", data=snapshot.to_claims(), expires_at=now_utc() - timedelta(minutes=1))
        value = "stale"
    client.set_cookie(issuer.cookie_name, value)

    resp = client.get("/account/")

    assert resp.status_code == 302
    assert _cookie(client, issuer.cookie_name) is None
    html = client.get(resp.headers["Location"]).get_data(as_text=True)
    assert "Your session has expired. Please log in again." in html


def test_tampered_credential_on_public_page_is_cleared(client, issuer):
    client.set_cookie(issuer.cookie_name, "garbage")

    resp = client.get("/")

    assert resp.status_code == 200
    assert "My Account" in resp.get_data(as_text=True)
    assert _cookie(client, issuer.cookie_name) is None


@pytest.mark.parametrize("path", ["/inv/", "/inv/add-classification", "/inv/add-inventory"])
def test_staff_pages_gate_anonymous_and_clients(client, make_account, login, path):
    resp = client.get(path)
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/account/login")

    make_account(account_type=AccountType.CLIENT)
    login()

    resp = client.get(path)
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/account/")
    html = client.get(resp.headers["Location"]).get_data(as_text=True)
    assert "You are not authorized to access this page." in html


def test_empty_classification_page(client):
    resp = client.get("/inv/type/SUV")

    assert resp.status_code == 200
    assert "No vehicles found for this classification." in resp.get_data(as_text=True)


def test_unknown_route_renders_404(client):
    resp = client.get("/no-such-page")

    assert resp.status_code == 404
    assert "find that page." in resp.get_data(as_text=True)


def test_crash_renders_generic_500(client):
    resp = client.get("/trigger-error")

    assert resp.status_code == 500
    html = resp.get_data(as_text=True)
    assert "Oh no! There was a crash. Maybe try a different route?" in html
    assert "simulated server error" not in html
    assert "Traceback" not in html


def test_register_with_overlong_password_rerenders(client, accounts_repo):
    resp = _register(client, account_password="Abc123!@#x" + "a" * 80)

    assert resp.status_code == 400
    html = resp.get_data(as_text=True)
    assert "Password cannot be longer than 72 bytes." in html
    assert 'value="Jane"' in html
    assert accounts_repo.by_id == {}


def test_change_password_to_overlong_value_rerenders(client, make_account, login):
    make_account()
    login()
    too_long = "New123!@#x" + "a" * 80

    resp = client.post(
        "/account/updatePassword",
        data={"current_password": STRONG_PASSWORD, "account_password": too_long, "confirm_password": too_long},
    )

    assert resp.status_code == 400
    assert "Password cannot be longer than 72 bytes." in resp.get_data(as_text=True)


def test_add_inventory_with_out_of_range_numbers_rerenders(client, make_account, login, inventory_repo):
    suv = inventory_repo.create_classification(name="SUV")
    make_account(email="employee@example.com", account_type=AccountType.EMPLOYEE)
    login(email="employee@example.com")

    resp = client.post(
        "/inv/add-inventory",
        data={
            "inv_make": "Jeep",
            "inv_model": "Wrangler",
            "inv_year": "2019",
            "inv_description": "Trail rated and ready for the weekend.",
            "inv_price": "inf",
            "inv_miles": "99999999999999",
            "inv_color": "Yellow",
            "classification_id": str(suv),
        },
    )

    assert resp.status_code == 400
    html = resp.get_data(as_text=True)
    assert "Price must be a number between 0 and 99,999,999.99." in html
    assert "Miles must be a whole number." in html
    assert 'value="Wrangler"' in html
    assert inventory_repo.items == {}
