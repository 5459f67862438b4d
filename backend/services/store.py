"""Visitor store: append hits and read back aggregate counts.

Every SQLAlchemy failure is logged with its cause and re-raised as a
StoreError, whose message is deliberately generic.
"""

import logging

from sqlalchemy import desc, distinct, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from errors import StoreError
from models import UNKNOWN_PLACE, Visitor

logger = logging.getLogger(__name__)


async def record_visit(
    session: AsyncSession,
    *,
    ip: str,
    user_agent: str,
    path: str = "/",
    country: str = UNKNOWN_PLACE,
    city: str = UNKNOWN_PLACE,
) -> Visitor:
    """Insert and commit one hit. The returned row carries its new id."""
    visit = Visitor(
        ip=ip,
        user_agent=user_agent,
        path=path[:500],
        country=country,
        city=city,
    )
    try:
        session.add(visit)
        await session.commit()
    except SQLAlchemyError as e:
        logger.exception("Failed to record visit from %s", ip)
        await session.rollback()
        raise StoreError() from e
    return visit


async def _scalar(session: AsyncSession, stmt) -> int:
    try:
        result = await session.execute(stmt)
    except SQLAlchemyError as e:
        logger.exception("Visitor query failed")
        raise StoreError() from e
    return result.scalar() or 0


async def count_all_visits(session: AsyncSession) -> int:
    return await _scalar(session, select(func.count(Visitor.id)))


async def count_distinct_sources(session: AsyncSession) -> int:
    return await _scalar(session, select(func.count(distinct(Visitor.ip))))


async def top_countries(session: AsyncSession, limit: int = 5) -> list[tuple[str, int]]:
    """Most frequent known countries, busiest first. "Unknown" is never listed."""
    visits = func.count(Visitor.id).label("visits")
    stmt = (
        select(Visitor.country, visits)
        .where(Visitor.country != UNKNOWN_PLACE)
        .group_by(Visitor.country)
        .order_by(desc(visits), Visitor.country)
        .limit(limit)
    )
    try:
        result = await session.execute(stmt)
    except SQLAlchemyError as e:
        logger.exception("Country breakdown query failed")
        raise StoreError() from e
    return [(country, count) for country, count in result.all()]


async def daily_visit_series(session: AsyncSession, limit: int = 30) -> list[tuple[str, int, int]]:
    """(date, visits, unique sources) for the most recent `limit` days, newest first."""
    day = func.date(Visitor.captured_at).label("day")
    stmt = (
        select(day, func.count(Visitor.id), func.count(distinct(Visitor.ip)))
        .group_by(day)
        .order_by(desc(day))
        .limit(limit)
    )
    try:
        result = await session.execute(stmt)
    except SQLAlchemyError as e:
        logger.exception("Daily series query failed")
        raise StoreError() from e
    return [(str(date), visits, unique) for date, visits, unique in result.all()]
