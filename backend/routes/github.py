"""GitHub stats routes: cached proxies over services/github.py.

Each route serves its cache entry while fresh, refetches once it expires,
and falls back to the stale entry (marked cached) when GitHub fails.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config import settings
from errors import UpstreamError
from services import github
from services.cache import CacheKind, FreshnessCache, get_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/github")

RECENT_REPO_LIMIT = 6
STALE_NOTE = "Using cached data"


@router.get("/stats")
@router.get("/followers")
async def profile_stats(cache: FreshnessCache = Depends(get_cache)):
    """Follower counts, star/fork totals and top languages."""
    if cache.is_fresh(CacheKind.PROFILE):
        return {**cache.get(CacheKind.PROFILE), "cached": True}

    try:
        data = await github.fetch_profile_summary(settings.github_token)
    except UpstreamError as e:
        stale = cache.get(CacheKind.PROFILE)
        if stale is not None:
            logger.info(
                "Serving stale profile stats (%.0fs old) after upstream failure",
                cache.age(CacheKind.PROFILE),
            )
            return {**stale, "cached": True, "error": STALE_NOTE}
        return JSONResponse({"error": str(e)}, status_code=e.status_code)

    cache.put(CacheKind.PROFILE, data)
    return {**data, "cached": False}


async def _cached_list(cache: FreshnessCache, kind: CacheKind, key: str, fetch) -> dict:
    """Shared flow for list payloads: an upstream failure never surfaces as an error status."""
    if cache.is_fresh(kind):
        return {key: cache.get(kind), "cached": True}

    try:
        items = await fetch()
    except UpstreamError as e:
        stale = cache.get(kind)
        if stale is not None:
            logger.info("Serving stale %s (%.0fs old) after upstream failure", kind.value, cache.age(kind))
            return {key: stale, "cached": True, "error": STALE_NOTE}
        return {key: [], "cached": False, "error": str(e)}

    cache.put(kind, items)
    return {key: items, "cached": False}


@router.get("/repos")
async def recent_repos(cache: FreshnessCache = Depends(get_cache)) -> dict:
    """Most recently updated repositories."""
    return await _cached_list(
        cache,
        CacheKind.REPOS,
        "repos",
        lambda: github.fetch_recent_repos(RECENT_REPO_LIMIT, settings.github_token),
    )


@router.get("/activity")
async def recent_activity(cache: FreshnessCache = Depends(get_cache)) -> dict:
    """Recent push events."""
    return await _cached_list(
        cache,
        CacheKind.ACTIVITY,
        "activity",
        lambda: github.fetch_recent_activity(settings.github_token),
    )
