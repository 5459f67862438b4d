"""Visitor tracking routes: record a hit, then summarize all hits."""

import logging

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from models import get_session
from services import geo, store

logger = logging.getLogger(__name__)

router = APIRouter()

TOP_COUNTRY_LIMIT = 5
DAILY_SERIES_DAYS = 30


def _client_ip(request: Request) -> str:
    """First X-Forwarded-For hop when behind a proxy, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else ""


@router.get("/visitors")
async def track_visit(
    request: Request,
    path: str = Query("/"),
    session: AsyncSession = Depends(get_session),
) -> dict:
    """Record this hit and return running totals that include it."""
    ip = _client_ip(request)
    user_agent = request.headers.get("user-agent") or "unknown"
    location = await geo.lookup(ip)

    visit = await store.record_visit(
        session,
        ip=ip,
        user_agent=user_agent,
        path=path or "/",
        country=location.country,
        city=location.city,
    )

    total = await store.count_all_visits(session)
    unique = await store.count_distinct_sources(session)
    countries = await store.top_countries(session, TOP_COUNTRY_LIMIT)

    return {
        "totalViews": total,
        "uniqueVisitors": unique,
        "countries": [{"country": c, "count": n} for c, n in countries],
        "recentVisit": {
            "country": visit.country,
            "city": visit.city,
            "time": visit.captured_at.isoformat(),
        },
    }


@router.get("/visitors/stats")
async def visitor_stats(session: AsyncSession = Depends(get_session)) -> list[dict]:
    """Per-day visit counts, newest day first."""
    series = await store.daily_visit_series(session, DAILY_SERIES_DAYS)
    return [
        {"date": date, "visits": visits, "uniqueVisitors": unique}
        for date, visits, unique in series
    ]
