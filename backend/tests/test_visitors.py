"""Tests for the visitor tracking API."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from models import Visitor
from services import geo


@pytest.mark.asyncio
async def test_total_views_counts_every_call(client):
    for n in range(1, 6):
        response = await client.get("/api/visitors")
        assert response.status_code == 200
        data = response.json()
        assert data["totalViews"] == n
        assert data["uniqueVisitors"] <= data["totalViews"]


@pytest.mark.asyncio
async def test_unique_visitors_uses_forwarded_address(client):
    for ip in ["8.8.8.8", "8.8.4.4", "8.8.8.8"]:
        response = await client.get("/api/visitors", headers={"X-Forwarded-For": f"{ip}, 10.0.0.1"})

    data = response.json()
    assert data["totalViews"] == 3
    assert data["uniqueVisitors"] == 2


@pytest.mark.asyncio
async def test_visit_row_captures_request(client, test_db):
    await client.get(
        "/api/visitors",
        params={"path": "/projects"},
        headers={"User-Agent": "Mozilla/5.0 test", "X-Forwarded-For": "8.8.8.8"},
    )

    visit = (await test_db.execute(select(Visitor))).scalar_one()
    assert visit.ip == "8.8.8.8"
    assert visit.user_agent == "Mozilla/5.0 test"
    assert visit.path == "/projects"


@pytest.mark.asyncio
async def test_recent_visit_and_countries(client, monkeypatch):
    places = {
        "8.8.8.8": geo.GeoLocation("United States", "Mountain View"),
        "1.1.1.1": geo.GeoLocation("Australia", "Sydney"),
    }

    async def fake_lookup(ip, **kwargs):
        return places.get(ip, geo.UNKNOWN)

    monkeypatch.setattr(geo, "lookup", fake_lookup)

    for ip in ["8.8.8.8", "8.8.8.8", "1.1.1.1", "127.0.0.1"]:
        response = await client.get("/api/visitors", headers={"X-Forwarded-For": ip})
    await client.get("/api/visitors", headers={"X-Forwarded-For": "1.1.1.1"})
    response = await client.get("/api/visitors", headers={"X-Forwarded-For": "8.8.8.8"})

    data = response.json()
    assert data["countries"] == [
        {"country": "United States", "count": 3},
        {"country": "Australia", "count": 2},
    ]
    assert data["recentVisit"]["country"] == "United States"
    assert data["recentVisit"]["city"] == "Mountain View"
    assert data["recentVisit"]["time"]


@pytest.mark.asyncio
async def test_unknown_location_is_recorded_but_not_listed(client):
    response = await client.get("/api/visitors")
    data = response.json()
    assert data["recentVisit"]["country"] == "Unknown"
    assert data["recentVisit"]["city"] == "Unknown"
    assert data["countries"] == []


@pytest.mark.asyncio
async def test_store_failure_returns_generic_500(client, test_db, monkeypatch):
    async def broken_commit():
        raise OperationalError("INSERT", {}, Exception("disk I/O error at /var/db"))

    monkeypatch.setattr(test_db, "commit", broken_commit)

    response = await client.get("/api/visitors")
    assert response.status_code == 500
    assert response.json() == {"error": "Database error"}


@pytest.mark.asyncio
async def test_daily_stats(client):
    for ip in ["8.8.8.8", "8.8.8.8", "1.1.1.1"]:
        await client.get("/api/visitors", headers={"X-Forwarded-For": ip})

    response = await client.get("/api/visitors/stats")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["visits"] == 3
    assert data[0]["uniqueVisitors"] == 2
    assert set(data[0]) == {"date", "visits", "uniqueVisitors"}


@pytest.mark.asyncio
async def test_daily_stats_empty(client):
    response = await client.get("/api/visitors/stats")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_daily_stats_store_failure(client, test_db, monkeypatch):
    async def broken_execute(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(test_db, "execute", broken_execute)

    response = await client.get("/api/visitors/stats")
    assert response.status_code == 500
    assert response.json() == {"error": "Database error"}
