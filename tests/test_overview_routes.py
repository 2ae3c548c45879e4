from __future__ import annotations

import pytest

from ringledger.models.timestamps import current_month
from tests.conftest import OWNER_A, OWNER_B, owner_headers


def _summary(client, month="2026-02", owner=OWNER_A):
    response = client.get(f"/api/summary?month={month}", headers=owner_headers(owner))
    assert response.status_code == 200
    return response.get_json()


def test_empty_summary_uses_default_goals(client):
    body = _summary(client)

    assert body["month"] == "2026-02"
    assert body["previousMonth"] == "2026-01"
    assert body["nextMonth"] == "2026-03"
    assert body["summary"] == {"income": 0, "expense": 0, "balance": 0}
    assert body["goals"]["balance"]["target"] == 200_000
    assert body["goals"]["save"]["target"] == 50_000
    assert body["goals"]["debt"]["achieved"] is False
    assert body["goals"]["debt"]["remainingDebt"] == 0
    assert body["goals"]["debt"]["ringRatio"] == 0
    assert body["pie"] == {"expense": [], "income": []}
    assert body["categories"] == []


def test_summary_defaults_to_current_month(client):
    body = client.get("/api/summary", headers=owner_headers()).get_json()

    assert body["month"] == current_month()


def test_summary_month_and_cumulative_figures(client, create_tx):
    create_tx(amount=280000, category="salary", type="income", occurredAt="2026-01-25")
    create_tx(amount=1200, category="food", occurredAt="2026-02-08")
    create_tx(amount=800, category="food", occurredAt="2026-02-10")
    create_tx(amount=78000, category="rent", occurredAt="2026-02-01")
    create_tx(owner=OWNER_B, amount=999999, type="income", category="other")

    body = _summary(client)

    assert body["summary"] == {"income": 0, "expense": 80_000, "balance": -80_000}
    assert body["cumulative"] == {"income": 280_000, "expense": 80_000, "balance": 200_000}
    assert body["goals"]["balance"]["current"] == -80_000
    assert body["goals"]["balance"]["achieved"] is False
    assert body["goals"]["save"]["ratio"] == 0
    # Rows arrive newest first, so food (Feb 10) is seen before rent (Feb 1).
    assert [(d["label"], d["value"]) for d in body["pie"]["expense"]] == [
        ("food", 2_000),
        ("rent", 78_000),
    ]
    assert body["forecast"]["level"] == "danger"
    assert set(body["categories"]) == {"salary", "food", "rent"}


def test_balance_goal_follows_selected_month(client, create_tx):
    create_tx(amount=300000, category="salary", type="income", occurredAt="2026-01-25")

    january = _summary(client, month="2026-01")
    february = _summary(client, month="2026-02")

    assert january["goals"]["balance"]["achieved"] is True
    assert january["goals"]["balance"]["percentage"] == 100
    assert february["summary"]["balance"] == 0
    assert february["goals"]["balance"]["current"] == 0
    assert february["goals"]["balance"]["percentage"] == 0
    assert february["goals"]["balance"]["achieved"] is False
    assert february["cumulative"]["balance"] == 300_000


def test_debt_goal_tracks_repayment_categories(client, create_tx):
    client.put("/api/preferences", json={"debtTotal": 100000}, headers=owner_headers())

    create_tx(amount=30000, category="loan repayment", occurredAt="2026-02-03")
    debt = _summary(client)["goals"]["debt"]
    assert debt["current"] == 30_000
    assert debt["remainingDebt"] == 70_000
    assert debt["ringRatio"] == pytest.approx(0.7)
    assert debt["percentage"] == 30
    assert debt["achieved"] is False

    create_tx(amount=70000, category="loan repayment", occurredAt="2026-03-03")
    debt = _summary(client)["goals"]["debt"]
    assert debt["remainingDebt"] == 0
    assert debt["achieved"] is True
    assert debt["ringRatio"] == 0


def test_category_goals_and_trackers_carry_progress(client, create_tx):
    client.put(
        "/api/preferences/category-goals",
        json={"category": "food", "target": 4000},
        headers=owner_headers(),
    )
    client.post(
        "/api/preferences/trackers",
        json={"title": "Trip", "current": 25000, "target": 100000},
        headers=owner_headers(),
    )
    create_tx(amount=1000, category="food", occurredAt="2026-02-08")

    body = _summary(client)

    assert body["categoryGoals"] == [
        {
            "category": "food",
            "current": 1000,
            "target": 4000,
            "ratio": 0.25,
            "percentage": 25,
            "remaining": 3000,
            "achieved": False,
        }
    ]
    tracker = body["trackers"][0]
    assert tracker["title"] == "Trip"
    assert tracker["progress"]["percentage"] == 25


def test_summary_rejects_bad_month(client):
    response = client.get("/api/summary?month=02-2026", headers=owner_headers())

    assert response.status_code == 400
    assert response.get_json() == {"error": "month must be YYYY-MM"}


def test_pie_png(client, create_tx):
    create_tx(amount=1200, category="food")
    create_tx(amount=5000, category="rent")

    response = client.get("/api/summary/pie.png?month=2026-02", headers=owner_headers())

    assert response.status_code == 200
    assert response.mimetype == "image/png"
    assert response.data.startswith(b"\x89PNG")


def test_pie_png_empty_month_still_renders(client):
    response = client.get(
        "/api/summary/pie.png?month=2026-02&type=income", headers=owner_headers()
    )

    assert response.status_code == 200
    assert response.data.startswith(b"\x89PNG")


def test_pie_png_rejects_unknown_type(client):
    response = client.get("/api/summary/pie.png?type=transfer", headers=owner_headers())

    assert response.status_code == 400
    assert response.get_json() == {"error": 'type must be "income" or "expense"'}
