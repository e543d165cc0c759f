from datetime import date, timedelta

from salon_booking.data import DEFAULT_CUSTOMIZATION


def test_booking_settings_default(client):
    res = client.get("/settings/booking")

    assert res.status_code == 200
    assert res.json() == {"same_day_policy": "same_day", "max_months_ahead": 3}


def test_booking_settings_update(admin_client):
    res = admin_client.put("/admin/settings/booking", json={"same_day_policy": "next_week"})
    assert res.status_code == 200
    assert res.json() == {"same_day_policy": "next_week", "max_months_ahead": 3}

    res = admin_client.put("/admin/settings/booking", json={"max_months_ahead": 6})
    assert res.json() == {"same_day_policy": "next_week", "max_months_ahead": 6}

    assert admin_client.get("/settings/booking").json()["max_months_ahead"] == 6
    assert admin_client.put("/admin/settings/booking", json={"same_day_policy": "never"}).status_code == 422
    assert admin_client.put("/admin/settings/booking", json={"max_months_ahead": 0}).status_code == 422


def test_next_day_policy_refuses_today(admin_client):
    admin_client.put("/admin/settings/booking", json={"same_day_policy": "next_day"})
    service_id = admin_client.post("/admin/services", json={"name": "Corte", "duration_minutes": 30}).json()["id"]
    body = {"service_id": service_id, "name": "Ana", "phone": "612345678", "time": "23:45"}

    today = admin_client.post("/appointments", json={**body, "date": date.today().isoformat()})
    tomorrow = admin_client.post("/appointments", json={**body, "date": (date.today() + timedelta(days=1)).isoformat()})

    assert today.status_code == 422
    assert tomorrow.status_code == 201


def test_available_dates_endpoint(admin_client):
    for day in range(7):
        admin_client.post("/admin/business-hours", json={"day_of_week": day, "start_time": "09:00", "end_time": "18:00"})
    admin_client.put("/admin/settings/booking", json={"same_day_policy": "next_week"})

    res = admin_client.get("/availability/dates", params={"days": 10})

    assert res.status_code == 200
    data = res.json()
    assert data["min_date"] == (date.today() + timedelta(days=7)).isoformat()
    assert data["dates"] == [(date.today() + timedelta(days=d)).isoformat() for d in (7, 8, 9)]


def test_customization_defaults_then_update(admin_client):
    res = admin_client.get("/settings/customization")
    assert res.json()["business_name"] == DEFAULT_CUSTOMIZATION["business_name"]

    res = admin_client.put(
        "/admin/settings/customization",
        json={"business_name": "Salón Lucía", "primary_color": "#ff0000"},
    )
    assert res.status_code == 200
    saved = res.json()
    assert saved["business_name"] == "Salón Lucía"
    assert saved["welcome_title"] == DEFAULT_CUSTOMIZATION["welcome_title"]
    assert saved["updated_at"] is not None

    res = admin_client.put("/admin/settings/customization", json={"hero_image_url": "https://example.com/a.jpg"})
    assert res.json()["business_name"] == "Salón Lucía"
    assert res.json()["hero_image_url"] == "https://example.com/a.jpg"
