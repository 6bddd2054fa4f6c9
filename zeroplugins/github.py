"""Repository search on GitHub."""

from __future__ import annotations

import json
import re
from typing import Any
from urllib.parse import urlencode, urlsplit, urlunsplit

import requests

SEARCH_API = "https://api.github.com/search/repositories"
PREVIEW_BASE = "https://opengraph.githubassets.com/0/"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/88.0.4324.182 Safari/537.36"
)

_COMMAND = re.compile(r">github[ \t\n\f\r](-.{1,10}? )?(.*)")


class GitHubError(Exception):
    """The search failed or found nothing."""


def not_null(text: str) -> str:
    """Return the text, or "None" when it is empty."""
    return text if text else "None"


def parse_command(text: str) -> tuple[str, str] | None:
    """Split ">github [-x ]query" into (option, query); option is "" when absent."""
    found = _COMMAND.fullmatch(text)
    if found is None:
        return None
    return found.group(1) or "", found.group(2)


def build_search_url(api: str, query: str) -> str:
    """Return the search URL with its query string set to the search terms."""
    parts = urlsplit(api)
    return urlunsplit(parts._replace(query=urlencode({"q": query})))


def search_repository(api: str, query: str, session: Any = None) -> dict[str, Any]:
    """Return the best matching repository's JSON object."""
    client = session if session is not None else requests
    response = client.get(build_search_url(api, query), headers={"User-Agent": USER_AGENT})
    if response.status_code != 200:
        raise GitHubError(f"code {response.status_code}")
    info = json.loads(response.content)
    if not _int(info.get("total_count")):
        raise GitHubError("没有找到这样的仓库")
    items = info.get("items") or []
    return items[0] if items else {}


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)


def format_repository(repo: dict[str, Any]) -> str:
    """Render the text description of a repository."""
    licence = repo.get("license")
    key = _str(licence.get("key")) if isinstance(licence, dict) else ""
    return (
        f"{_str(repo.get('full_name'))}\n"
        f"Description: {_str(repo.get('description'))}\n"
        f"Star/Fork/Issue: {_int(repo.get('watchers'))}/{_int(repo.get('forks'))}"
        f"/{_int(repo.get('open_issues'))}\n"
        f"Language: {not_null(_str(repo.get('language')))}\n"
        f"License: {not_null(key.upper())}\n"
        f"Last pushed: {_str(repo.get('pushed_at'))}\n"
        f"Jump: {_str(repo.get('html_url'))}\n"
    )


def preview_image_url(base: str, full_name: str) -> str:
    """Return the social preview image URL of a repository."""
    return base + full_name