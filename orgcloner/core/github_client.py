"""GitHub API operations: organisation repository listing."""

from __future__ import annotations

import json
import logging
import re
import urllib.error
import urllib.request
from typing import Any
from urllib.parse import urlencode, urlparse, urlunparse

from .constants import API_BASE, CLONE_USERNAME, GITHUB_API_ACCEPT, HTTP_TIMEOUT_SEC, PER_PAGE, USER_AGENT
from .errors import RemoteAPIError
from .types import RepoDescriptor

logger = logging.getLogger(__name__)

_NEXT_LINK_RE = re.compile(r'<([^>]+)>\s*;\s*rel="?next"?')


def next_page_url(link_header: str | None) -> str | None:
    """Return the rel="next" target of a GitHub ``Link`` header, if any.

    urllib, unlike requests' ``Response.links``, has no Link header parser;
    only the ``next`` relation is needed here.
    """
    if not link_header:
        return None
    for part in link_header.split(","):
        m = _NEXT_LINK_RE.search(part)
        if m:
            return m.group(1)
    return None


class GitHubClient:
    def __init__(self, token: str | None = None, api_base: str = API_BASE) -> None:
        self.token = token
        self.api_base = api_base.rstrip("/")

    # ---------- low-level HTTP ----------
    def _request_json(self, url: str) -> tuple[Any, str | None]:
        """GET ``url`` and return (decoded body, next page url)."""
        req = urllib.request.Request(url)
        req.add_header("Accept", GITHUB_API_ACCEPT)
        req.add_header("User-Agent", USER_AGENT)
        if self.token:
            req.add_header("Authorization", f"Bearer {self.token}")
        try:
            with urllib.request.urlopen(req, timeout=HTTP_TIMEOUT_SEC) as resp:
                status = getattr(resp, "status", 200)
                if not 200 <= status < 300:
                    raise RemoteAPIError(f"HTTP request error: {status} for {url}", status=status)
                body = json.loads(resp.read().decode("utf-8"))
                return body, next_page_url(resp.headers.get("Link"))
        except urllib.error.HTTPError as e:
            raise RemoteAPIError(f"HTTP request error: {e.code} {e.reason} for {url}", status=e.code) from e
        except urllib.error.URLError as e:
            raise RemoteAPIError(f"Transport error for {url}: {e.reason}") from e
        except (OSError, ValueError) as e:
            raise RemoteAPIError(f"Failed to read {url}: {e}") from e

    # ---------- public API ----------
    @staticmethod
    def inject_token_into_https(clone_url: str, token: str) -> str:
        """https://github.com/owner/repo.git -> https://x-access-token:<token>@github.com/owner/repo.git"""
        u = urlparse(clone_url)
        netloc = f"{CLONE_USERNAME}:{token}@{u.netloc}"
        return urlunparse((u.scheme, netloc, u.path, u.params, u.query, u.fragment))

    def list_org_repos(
        self,
        org: str,
        include_archived: bool = True,
        per_page: int = PER_PAGE,
    ) -> list[RepoDescriptor]:
        """Page through every repository of ``org``.

        All-or-nothing: a failure on any page raises RemoteAPIError and the
        repositories collected from earlier pages are dropped.
        """
        query = urlencode(
            {"per_page": per_page, "page": 1, "type": "all", "sort": "full_name", "direction": "asc"}
        )
        url: str | None = f"{self.api_base}/orgs/{org}/repos?{query}"
        repos: list[RepoDescriptor] = []
        pages = 0
        while url:
            data, url = self._request_json(url)
            pages += 1
            if not isinstance(data, list):
                raise RemoteAPIError(f"Unexpected response listing repositories of {org!r}")
            if not data:
                break
            for r in data:
                if (not include_archived) and r.get("archived"):
                    continue
                try:
                    repos.append(RepoDescriptor(clone_url=r["clone_url"], name=r["name"]))
                except (KeyError, TypeError) as e:
                    raise RemoteAPIError(f"Malformed repository entry for {org!r}: {e}") from e
        logger.debug("Listed %d repositories of %s over %d page(s)", len(repos), org, pages)
        return repos
