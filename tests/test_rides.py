import datetime as dt
from decimal import Decimal

from rideshare.models.ride import Ride, RideStatus

from tests.conftest import car_payload, register, ride_payload


def _create_ride(driver, **extra):
    resp = driver["client"].post("/api/rides", json=ride_payload(driver["car"]["id"], **extra))
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_ride(driver):
    ride = _create_ride(driver)
    assert ride["status"] == "active"
    assert ride["availableSeats"] == 3
    assert ride["totalSeats"] == 3
    assert ride["driverId"] == driver["user"]["id"]
    assert Decimal(ride["farePerSeat"]) == Decimal("250")
    assert ride["preferences"] == {"instantBooking": True, "womenOnly": False, "noSmoking": True}


def test_create_ride_accepts_date_only(driver):
    ride = _create_ride(driver, departureDate="2031-06-02")
    assert ride["departureDate"].startswith("2031-06-02T00:00:00")


def test_create_ride_with_foreign_car(driver, make_client):
    other = make_client()
    register(other, "other")
    resp = other.post("/api/rides", json=ride_payload(driver["car"]["id"]))
    assert resp.status_code == 404
    assert resp.json() == {"message": "Car not found"}


def test_create_ride_validation(driver):
    resp = driver["client"].post("/api/rides", json=ride_payload(driver["car"]["id"], availableSeats=-1))
    assert resp.status_code == 400
    resp = driver["client"].post("/api/rides", json={"carId": driver["car"]["id"]})
    assert resp.status_code == 400


def test_get_ride_with_details(driver, client):
    ride = _create_ride(driver)
    resp = client.get(f"/api/rides/{ride['id']}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["driver"]["username"] == "driver"
    assert "password" not in body["driver"]
    assert body["car"]["id"] == driver["car"]["id"]
    assert body["bookings"] == []


def test_get_missing_ride(client):
    resp = client.get("/api/rides/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Ride not found"}


def test_search_case_insensitive_substring(driver, client):
    ride = _create_ride(driver)
    resp = client.get("/api/rides/search", params={"pickup": "dha", "destination": "GULBERG", "date": "2031-05-01"})
    assert resp.status_code == 200
    found = resp.json()
    assert [r["id"] for r in found] == [ride["id"]]
    assert found[0]["driver"]["id"] == driver["user"]["id"]
    assert found[0]["car"]["registrationNumber"] == "LEA-1234"

    miss = client.get("/api/rides/search", params={"pickup": "clifton", "destination": "gulberg", "date": "2031-05-01"})
    assert miss.json() == []


def test_search_filters_date_and_status(driver, client, db):
    early = _create_ride(driver, departureDate="2031-04-30T23:00:00")
    later = _create_ride(driver, departureDate="2031-05-03T09:00:00")
    first = _create_ride(driver, departureDate="2031-05-01T07:30:00")
    cancelled = _create_ride(driver, departureDate="2031-05-02T10:00:00")

    r = db.get(Ride, cancelled["id"])
    r.status = RideStatus.CANCELLED
    db.commit()

    resp = client.get("/api/rides/search", params={"pickup": "phase 5", "destination": "lahore", "date": "2031-05-01"})
    ids = [x["id"] for x in resp.json()]
    assert ids == [first["id"], later["id"]]
    assert early["id"] not in ids


def test_search_wildcards_are_literal(driver, client):
    _create_ride(driver)
    resp = client.get("/api/rides/search", params={"pickup": "%", "destination": "_", "date": "2031-05-01"})
    assert resp.json() == []


def test_search_requires_params(client):
    resp = client.get("/api/rides/search", params={"pickup": "dha"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Pickup, destination, and date are required"}


def test_search_rejects_bad_date(client):
    resp = client.get("/api/rides/search", params={"pickup": "a", "destination": "b", "date": "tomorrow"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid date"}


def test_my_rides_most_recent_first(driver, db, make_client):
    older = _create_ride(driver)
    newer = _create_ride(driver)
    db.get(Ride, older["id"]).created_at = dt.datetime(2030, 1, 1, tzinfo=dt.timezone.utc)
    db.get(Ride, newer["id"]).created_at = dt.datetime(2030, 1, 2, tzinfo=dt.timezone.utc)
    db.commit()

    other = make_client()
    register(other, "other")
    other_car = other.post("/api/cars", json=car_payload(registrationNumber="LEZ-9")).json()
    other.post("/api/rides", json=ride_payload(other_car["id"]))

    resp = driver["client"].get("/api/my-rides")
    assert resp.status_code == 200
    assert [r["id"] for r in resp.json()] == [newer["id"], older["id"]]


def test_ride_bookings_visible_to_driver_only(driver, passenger):
    ride = _create_ride(driver)
    passenger["client"].post("/api/bookings", json={"rideId": ride["id"], "seatsBooked": 1, "totalFare": "250.00"})

    resp = driver["client"].get(f"/api/rides/{ride['id']}/bookings")
    assert resp.status_code == 200
    assert [b["passengerId"] for b in resp.json()] == [passenger["user"]["id"]]

    assert passenger["client"].get(f"/api/rides/{ride['id']}/bookings").status_code == 403
    assert driver["client"].get("/api/rides/missing/bookings").status_code == 404


def test_deleting_car_cascades_to_rides(driver, db):
    from rideshare.models.car import Car

    ride = _create_ride(driver)
    db.delete(db.get(Car, driver["car"]["id"]))
    db.commit()
    db.expire_all()
    assert db.get(Ride, ride["id"]) is None


def test_search_rejects_blank_params(driver, client):
    _create_ride(driver)
    resp = client.get("/api/rides/search", params={"pickup": "   ", "destination": "   ", "date": "2031-05-01"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Pickup, destination, and date are required"}

    resp = client.get("/api/rides/search", params={"pickup": "dha", "destination": "gulberg", "date": "  "})
    assert resp.status_code == 400


def test_search_storage_failure_message(client, monkeypatch):
    from sqlalchemy.exc import OperationalError

    from rideshare.routers import rides as rides_router

    def _broken(*args, **kwargs):
        raise OperationalError("SELECT rides ...", {}, Exception("connection lost"))

    monkeypatch.setattr(rides_router, "search_rides", _broken)
    resp = client.get("/api/rides/search", params={"pickup": "a", "destination": "b", "date": "2031-05-01"})
    assert resp.status_code == 500
    assert resp.json() == {"message": "Failed to search rides"}
