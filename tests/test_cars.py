from rideshare.models.car import Car, VerificationStatus
from rideshare.services.cars import create_car, get_pending_cars, update_car_verification

from tests.conftest import car_payload, register


def test_create_car_starts_pending(client):
    register(client, "driver")
    resp = client.post("/api/cars", json=car_payload(registrationNumber="lea-1 "))
    assert resp.status_code == 201
    car = resp.json()
    assert car["verificationStatus"] == "pending"
    assert car["documentsUploaded"] is False
    assert car["registrationNumber"] == "LEA-1"

    mine = client.get("/api/cars").json()
    assert [c["id"] for c in mine] == [car["id"]]


def test_create_car_ignores_client_status(client):
    register(client, "driver")
    resp = client.post("/api/cars", json=car_payload(verificationStatus="approved"))
    assert resp.status_code == 201
    assert resp.json()["verificationStatus"] == "pending"


def test_create_car_validation(client):
    register(client, "driver")
    resp = client.post("/api/cars", json=car_payload(seatingCapacity=0))
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid data provided"


def test_duplicate_registration_number_is_conflict(client, make_client):
    register(client, "driver")
    assert client.post("/api/cars", json=car_payload()).status_code == 201

    other = make_client()
    register(other, "driver2")
    resp = other.post("/api/cars", json=car_payload())
    assert resp.status_code == 409
    assert "registration number" in resp.json()["message"]


def test_cars_list_only_own(driver, passenger):
    assert passenger["client"].get("/api/cars").json() == []
    assert len(driver["client"].get("/api/cars").json()) == 1


def test_non_admin_cannot_verify(driver, passenger, db):
    car_id = driver["car"]["id"]
    for c in (driver["client"], passenger["client"]):
        resp = c.patch(f"/api/cars/{car_id}/verify", json={"status": "approved"})
        assert resp.status_code == 403
        assert resp.json() == {"message": "Admin access required"}
    assert db.get(Car, car_id).verification_status == VerificationStatus.PENDING


def test_admin_approves_car(driver, admin):
    car_id = driver["car"]["id"]
    resp = admin["client"].patch(f"/api/cars/{car_id}/verify", json={"status": "approved"})
    assert resp.status_code == 200
    assert resp.json()["verificationStatus"] == "approved"

    pending = admin["client"].get("/api/admin/pending-cars").json()
    assert pending == []


def test_admin_rejects_car(driver, admin):
    car_id = driver["car"]["id"]
    resp = admin["client"].patch(f"/api/cars/{car_id}/verify", json={"status": "rejected"})
    assert resp.status_code == 200
    assert resp.json()["verificationStatus"] == "rejected"


def test_terminal_status_has_no_re_review(driver, admin):
    car_id = driver["car"]["id"]
    admin["client"].patch(f"/api/cars/{car_id}/verify", json={"status": "rejected"})
    resp = admin["client"].patch(f"/api/cars/{car_id}/verify", json={"status": "approved"})
    assert resp.status_code == 409


def test_verify_rejects_unknown_status(driver, admin):
    car_id = driver["car"]["id"]
    resp = admin["client"].patch(f"/api/cars/{car_id}/verify", json={"status": "pending"})
    assert resp.status_code == 400


def test_verify_missing_car(admin):
    resp = admin["client"].patch("/api/cars/no-such-car/verify", json={"status": "approved"})
    assert resp.status_code == 404
    assert resp.json() == {"message": "Car not found"}


def test_verification_service(db, driver):
    owner_id = driver["user"]["id"]
    car = create_car(db, {
        "make": "Honda", "model": "City", "year": 2019, "color": "Grey",
        "registration_number": "LEB-77", "seating_capacity": 4,
    }, owner_id)
    assert car.verification_status == VerificationStatus.PENDING
    assert {c.id for c in get_pending_cars(db)} == {car.id, driver["car"]["id"]}

    assert update_car_verification(db, "missing", "approved") is None
    updated = update_car_verification(db, car.id, "approved")
    assert updated.verification_status == VerificationStatus.APPROVED
    assert car.id not in {c.id for c in get_pending_cars(db)}
