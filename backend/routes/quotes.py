"""Random programming quotes."""

from fastapi import APIRouter, Query

from services import quotes

router = APIRouter()


@router.get("/quotes")
async def random_quotes(count: int = Query(3)) -> list[str]:
    """Between 1 and 5 distinct quotes; out-of-range counts are clamped."""
    return quotes.pick(count)
