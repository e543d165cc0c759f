from datetime import date, time, timedelta

from salon_booking.models import AdminUser, Appointment, CustomizationSettings, RevokedToken, Service


def test_service_crud(admin_client):
    res = admin_client.post("/admin/services", json={"name": "Corte", "duration_minutes": 30, "price": 12.5})
    assert res.status_code == 201
    service = res.json()
    assert service["price"] == 12.5

    res = admin_client.put(f"/admin/services/{service['id']}", json={"duration_minutes": 45})
    assert res.status_code == 200
    assert res.json()["duration_minutes"] == 45
    assert res.json()["name"] == "Corte"

    assert admin_client.get(f"/services/{service['id']}").status_code == 200
    assert admin_client.delete(f"/admin/services/{service['id']}").status_code == 204
    assert admin_client.get(f"/services/{service['id']}").status_code == 404


def test_service_validation(admin_client):
    assert admin_client.post("/admin/services", json={"name": "Corte", "duration_minutes": 0}).status_code == 422
    assert admin_client.post("/admin/services", json={"name": "Corte", "duration_minutes": 30, "price": -1}).status_code == 422
    assert admin_client.post("/admin/services", json={"duration_minutes": 30}).status_code == 422
    assert admin_client.put("/admin/services/999", json={"name": "X"}).status_code == 404


def test_service_in_use_cannot_be_deleted(admin_client, session):
    service_id = admin_client.post("/admin/services", json={"name": "Corte", "duration_minutes": 30}).json()["id"]
    session.add(Appointment(service_id=service_id, name="Ana", phone="600000000",
                            date=date.today() + timedelta(days=3), time=time(10)))
    session.commit()

    assert admin_client.delete(f"/admin/services/{service_id}").status_code == 409


def test_services_are_public(client, admin_client):
    admin_client.post("/admin/services", json={"name": "Corte", "duration_minutes": 30})
    admin_client.post("/admin/services", json={"name": "Tinte", "duration_minutes": 90})
    client.headers.pop("Authorization")

    res = client.get("/services")

    assert res.status_code == 200
    assert [s["name"] for s in res.json()] == ["Tinte", "Corte"]
    assert client.post("/admin/services", json={"name": "X", "duration_minutes": 5}).status_code == 401


def test_business_hours(admin_client):
    morning = admin_client.post(
        "/admin/business-hours", json={"day_of_week": 0, "start_time": "09:00", "end_time": "13:00"}
    )
    admin_client.post("/admin/business-hours", json={"day_of_week": 0, "start_time": "16:00", "end_time": "20:00"})
    admin_client.post("/admin/business-hours", json={"day_of_week": 5, "start_time": "10:00", "end_time": "14:00"})

    assert morning.status_code == 201
    assert morning.json()["day_name"] == "Lunes"

    hours = admin_client.get("/business-hours").json()
    assert [(h["day_name"], h["start_time"]) for h in hours] == [
        ("Lunes", "09:00:00"),
        ("Lunes", "16:00:00"),
        ("Sábado", "10:00:00"),
    ]

    hour_id = morning.json()["id"]
    res = admin_client.put(f"/admin/business-hours/{hour_id}", json={"end_time": "14:00"})
    assert res.status_code == 200
    assert res.json()["end_time"] == "14:00:00"

    assert admin_client.delete(f"/admin/business-hours/{hour_id}").status_code == 204
    assert len(admin_client.get("/business-hours").json()) == 2


def test_business_hours_validation(admin_client):
    bad_range = {"day_of_week": 1, "start_time": "13:00", "end_time": "09:00"}
    bad_day = {"day_of_week": 7, "start_time": "09:00", "end_time": "13:00"}

    assert admin_client.post("/admin/business-hours", json=bad_range).status_code == 422
    assert admin_client.post("/admin/business-hours", json=bad_day).status_code == 422

    hour_id = admin_client.post(
        "/admin/business-hours", json={"day_of_week": 1, "start_time": "09:00", "end_time": "13:00"}
    ).json()["id"]
    assert admin_client.put(f"/admin/business-hours/{hour_id}", json={"start_time": "13:00"}).status_code == 422


def test_blocked_slots(admin_client):
    day = (date.today() + timedelta(days=5)).isoformat()

    whole = admin_client.post("/admin/blocked-slots", json={"date": day})
    partial = admin_client.post(
        "/admin/blocked-slots", json={"date": day, "start_time": "12:00", "end_time": "13:00"}
    )

    assert whole.status_code == 201
    assert whole.json()["whole_day"] is True
    assert partial.json()["whole_day"] is False
    assert len(admin_client.get("/admin/blocked-slots", params={"on_date": day}).json()) == 2

    assert admin_client.delete(f"/admin/blocked-slots/{whole.json()['id']}").status_code == 204
    assert len(admin_client.get("/admin/blocked-slots").json()) == 1


def test_blocked_slot_validation(admin_client):
    day = date.today().isoformat()

    half = admin_client.post("/admin/blocked-slots", json={"date": day, "start_time": "12:00"})
    reversed_range = admin_client.post(
        "/admin/blocked-slots", json={"date": day, "start_time": "13:00", "end_time": "12:00"}
    )

    assert half.status_code == 422
    assert reversed_range.status_code == 422


def test_dashboard_counts(admin_client):
    service_id = admin_client.post("/admin/services", json={"name": "Corte", "duration_minutes": 30}).json()["id"]
    admin_client.post("/admin/business-hours", json={"day_of_week": 2, "start_time": "09:00", "end_time": "13:00"})
    day = (date.today() + timedelta(days=2)).isoformat()
    base = {"service_id": service_id, "name": "Ana", "phone": "612345678", "date": day}
    admin_client.post("/appointments", json={**base, "time": "09:00"})
    admin_client.post("/admin/appointments", json={**base, "time": "10:00"})
    admin_client.post("/admin/appointments", json={**base, "time": "11:00", "status": "rejected"})

    res = admin_client.get("/admin/dashboard")

    assert res.status_code == 200
    assert res.json() == {
        "pending": 1,
        "accepted": 1,
        "rejected": 1,
        "total": 3,
        "today_accepted": 0,
        "services": 1,
        "business_hours": 1,
    }


def test_timestamps_default_to_aware_utc():
    rows = [
        Service(name="Corte", duration_minutes=30),
        Appointment(service_id=1, name="Ana", phone="612345678", date=date.today(), time=time(10)),
        CustomizationSettings(),
        AdminUser(username="admin", password_hash="x"),
        RevokedToken(jti="abc"),
    ]

    for row in rows:
        stamp = row.revoked_at if isinstance(row, RevokedToken) else row.created_at
        assert stamp.tzinfo is not None
        assert stamp.utcoffset() == timedelta(0)
