"""GitHub REST API client for the site owner's public stats.

Three independent fetches, each reshaped into the small dicts the front end
renders. Any non-2xx status, network failure, or body that is not JSON of the
expected shape becomes an UpstreamError. Nothing is retried; caching lives
in the routes.
"""

import asyncio
import logging
from collections import Counter

import httpx

from config import settings
from errors import UpstreamError

logger = logging.getLogger(__name__)

TOP_LANGUAGES = 5
NO_DESCRIPTION = "No description provided"


def _headers(token: str | None) -> dict:
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": f"{settings.github_user}-site",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _client(token: str | None, transport: httpx.AsyncBaseTransport | None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.github_api_url,
        headers=_headers(token),
        timeout=settings.upstream_timeout,
        transport=transport,
    )


async def _get_json(client: httpx.AsyncClient, path: str, params: dict | None = None, *, expect: type = dict):
    """Decoded body of a GET, which must be an `expect` (a list must hold only objects)."""
    try:
        resp = await client.get(path, params=params)
        resp.raise_for_status()
        data = resp.json()
    except httpx.HTTPError as e:
        logger.warning("GitHub request %s failed: %s", path, e)
        raise UpstreamError() from e
    except ValueError as e:
        logger.warning("GitHub returned a non-JSON body for %s", path)
        raise UpstreamError() from e

    if not isinstance(data, expect) or (expect is list and not all(isinstance(i, dict) for i in data)):
        logger.warning("GitHub returned an unexpected %s body for %s", type(data).__name__, path)
        raise UpstreamError()
    return data


def language_histogram(repos: list[dict], top: int = TOP_LANGUAGES) -> list[dict]:
    """Repos per language, most common first; ties keep first-seen order."""
    counts = Counter(r["language"] for r in repos if r.get("language"))
    return [{"name": name, "count": count} for name, count in counts.most_common(top)]


async def fetch_profile_summary(
    token: str | None = None, *, transport: httpx.AsyncBaseTransport | None = None
) -> dict:
    """Follower counts plus star/fork totals and top languages across all repos."""
    user = settings.github_user
    async with _client(token, transport) as client:
        profile, repos = await asyncio.gather(
            _get_json(client, f"/users/{user}"),
            _get_json(client, f"/users/{user}/repos", {"per_page": 100}, expect=list),
        )

    return {
        "followers": profile.get("followers", 0),
        "following": profile.get("following", 0),
        "publicRepos": profile.get("public_repos", 0),
        "totalStars": sum(r.get("stargazers_count", 0) for r in repos),
        "totalForks": sum(r.get("forks_count", 0) for r in repos),
        "languages": language_histogram(repos),
    }


def _project_repo(r: dict) -> dict:
    return {
        "name": r.get("name"),
        "url": r.get("html_url"),
        "description": r.get("description") or NO_DESCRIPTION,
        "language": r.get("language"),
        "stars": r.get("stargazers_count", 0),
        "forks": r.get("forks_count", 0),
        "watchers": r.get("watchers_count", 0),
        "size": r.get("size", 0),
        "createdAt": r.get("created_at"),
        "updatedAt": r.get("updated_at"),
        "pushedAt": r.get("pushed_at"),
        "homepage": r.get("homepage"),
        "topics": r.get("topics") or [],
    }


async def fetch_recent_repos(
    limit: int = 6, token: str | None = None, *, transport: httpx.AsyncBaseTransport | None = None
) -> list[dict]:
    """Most recently updated repositories."""
    async with _client(token, transport) as client:
        repos = await _get_json(
            client,
            f"/users/{settings.github_user}/repos",
            {"sort": "updated", "per_page": limit},
            expect=list,
        )
    return [_project_repo(r) for r in repos]


def _push_summary(event: dict) -> dict:
    payload = event.get("payload") or {}
    commits = payload.get("size")
    if commits is None:
        commits = len(payload.get("commits") or [])
    return {
        "date": (event.get("created_at") or "")[:10],
        "commits": commits,
        "repo": (event.get("repo") or {}).get("name"),
    }


async def fetch_recent_activity(
    token: str | None = None, *, transport: httpx.AsyncBaseTransport | None = None
) -> list[dict]:
    """Recent public push events as (date, commit count, repo) rows."""
    async with _client(token, transport) as client:
        events = await _get_json(
            client,
            f"/users/{settings.github_user}/events/public",
            {"per_page": 100},
            expect=list,
        )
    return [_push_summary(e) for e in events if e.get("type") == "PushEvent"]
