"""GitHub release listing over the REST API."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from verman._compat import Self
from verman.release.exceptions import ReleaseListError
from verman.release.models import RemoteRelease

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0
PER_PAGE = 100


class GitHubReleaseLister:
    """Lists the releases of a GitHub repository, following pagination."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_url = api_url
        self.token = token
        self.timeout = timeout
        self.transport = transport
        self.client: httpx.Client | None = None

    def start_client(self) -> Self:
        """Initialize the HTTP client for API calls."""
        headers = {"Accept": "application/vnd.github+json", "X-GitHub-Api-Version": "2022-11-28"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        self.client = httpx.Client(
            base_url=self.api_url,
            headers=headers,
            timeout=self.timeout,
            transport=self.transport,
            follow_redirects=True,
        )
        return self

    def close(self) -> None:
        """Close the HTTP client."""
        if self.client:
            self.client.close()
            self.client = None

    def _get_page(self, url: str, params: dict[str, Any] | None, repo_slug: str) -> httpx.Response:
        assert self.client is not None

        try:
            response = self.client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 404:
                msg = f"Repository '{repo_slug}' not found"
            elif status in (403, 429) and exc.response.headers.get("x-ratelimit-remaining") == "0":
                msg = f"GitHub API rate limit exceeded while listing releases for '{repo_slug}'"
            else:
                msg = f"Unable to list GitHub releases for '{repo_slug}': HTTP {status}"
            raise ReleaseListError(msg) from exc
        except httpx.HTTPError as exc:
            msg = f"Unable to list GitHub releases for '{repo_slug}': {exc}"
            raise ReleaseListError(msg) from exc
        return response

    def list_releases(self, organization: str, repository: str) -> list[RemoteRelease]:
        """Return every release of ``organization/repository``.

        A client opened here is closed before returning; one opened with
        :meth:`start_client` is left for the caller to close.

        Raises:
            ReleaseListError: On transport errors, non-2xx responses or malformed payloads.
        """
        owns_client = self.client is None
        if owns_client:
            self.start_client()
        try:
            return self._collect_releases(organization, repository)
        finally:
            if owns_client:
                self.close()

    def _collect_releases(self, organization: str, repository: str) -> list[RemoteRelease]:
        repo_slug = f"{organization}/{repository}"
        url: str | None = f"/repos/{organization}/{repository}/releases"
        params: dict[str, Any] | None = {"per_page": PER_PAGE}
        releases: list[RemoteRelease] = []

        while url is not None:
            response = self._get_page(url, params, repo_slug)
            try:
                payload = response.json()
            except ValueError as exc:
                msg = f"Invalid JSON in GitHub releases response for '{repo_slug}'"
                raise ReleaseListError(msg) from exc
            if not isinstance(payload, list):
                msg = f"Unexpected GitHub releases payload for '{repo_slug}': expected a list"
                raise ReleaseListError(msg)

            for item in payload:
                try:
                    releases.append(RemoteRelease.model_validate(item))
                except ValidationError as exc:
                    logger.warning("Skipping malformed release entry for '%s' (%d validation error(s))", repo_slug, exc.error_count())

            # The "next" link already carries the query string.
            url = response.links.get("next", {}).get("url")
            params = None

        logger.debug("Fetched %d release(s) for '%s'", len(releases), repo_slug)
        return releases
