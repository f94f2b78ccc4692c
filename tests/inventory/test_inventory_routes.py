import pytest

from dealership.core.enums import AccountType


@pytest.fixture
def staff(make_account, login):
    make_account(email="employee@example.com", account_type=AccountType.EMPLOYEE, firstname="Emma")
    login(email="employee@example.com")


@pytest.fixture
def vehicle(inventory_repo):
    suv = inventory_repo.create_classification(name="SUV")
    inv_id = inventory_repo.create_item(
        inv_make="Jeep",
        inv_model="Wrangler",
        inv_year=2019,
        inv_description="Trail rated and ready for the weekend.",
        inv_image="/images/vehicles/wrangler.jpg",
        inv_thumbnail="/images/vehicles/wrangler-tn.jpg",
        inv_price=28045,
        inv_miles=41205,
        inv_color="Yellow",
        classification_id=suv,
    )
    return inventory_repo.get_item(inv_id)


def test_classification_and_detail_are_public(client, vehicle):
    html = client.get("/inv/type/SUV").get_data(as_text=True)
    assert "Jeep Wrangler" in html
    assert "$28,045" in html

    resp = client.get(f"/inv/detail/{vehicle.inv_id}")
    assert resp.status_code == 200
    assert "41,205" in resp.get_data(as_text=True)


def test_missing_vehicle_is_404(client):
    assert client.get("/inv/detail/999").status_code == 404


def test_management_page_for_staff(client, staff):
    resp = client.get("/inv/")

    assert resp.status_code == 200
    assert "Inventory Management" in resp.get_data(as_text=True)


def test_add_classification_flow(client, staff, inventory_repo):
    resp = client.post("/inv/add-classification", data={"classification_name": "Van"}, follow_redirects=True)

    assert resp.status_code == 200
    assert "added successfully." in resp.get_data(as_text=True)
    assert inventory_repo.get_classification_by_name("Van") is not None

    resp = client.post("/inv/add-classification", data={"classification_name": "Van"})
    assert resp.status_code == 409


def test_add_inventory_rejects_bad_input_with_sticky_values(client, staff, vehicle):
    resp = client.post(
        "/inv/add-inventory",
        data={"inv_make": "Ford", "inv_model": "F", "classification_id": str(vehicle.classification_id)},
    )

    assert resp.status_code == 400
    html = resp.get_data(as_text=True)
    assert "Model must be at least 3 characters." in html
    assert 'value="Ford"' in html


def test_edit_inventory_flow(client, staff, vehicle, inventory_repo):
    form = client.get(f"/inv/edit/{vehicle.inv_id}")
    assert form.status_code == 200
    assert 'value="Wrangler"' in form.get_data(as_text=True)

    resp = client.post(
        f"/inv/edit/{vehicle.inv_id}",
        data={
            "inv_make": "Jeep",
            "inv_model": "Wrangler",
            "inv_year": "2019",
            "inv_description": "Trail rated and ready for the weekend.",
            "inv_image": vehicle.inv_image,
            "inv_thumbnail": vehicle.inv_thumbnail,
            "inv_price": "26500",
            "inv_miles": "41205",
            "inv_color": "Yellow",
            "classification_id": str(vehicle.classification_id),
        },
    )

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith(f"/inv/detail/{vehicle.inv_id}")
    assert inventory_repo.get_item(vehicle.inv_id).inv_price == 26500
