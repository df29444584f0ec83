"""GitHub API client."""

from typing import List, Optional

import requests

from milestonecheck.errors import (
    MilestoneAuthError,
    MilestoneNotFoundError,
    MilestoneTransportError,
)
from milestonecheck.github.auth import BasicAuthFilter
from milestonecheck.github.models import Credential, Milestone, Repository

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 10.0

# GitHub accepts a token as the Basic auth username with this fixed password.
TOKEN_PASSWORD = "x-oauth-basic"

USER_AGENT = "milestonecheck"


class GitHubClient:
    """Lightweight, read-only GitHub API client for milestone lookups."""

    def __init__(
        self,
        credential: Optional[Credential] = None,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize GitHub client.

        Args:
            credential: Access token. If None, requests are anonymous.
            base_url: API root, e.g. for GitHub Enterprise.
            timeout: Seconds to wait on connect and read.
            session: Session to use. A new one is created and owned if None.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {"Accept": "application/vnd.github+json", "User-Agent": USER_AGENT}
        )
        if credential is not None:
            self.session.auth = BasicAuthFilter(
                credential.token.get_secret_value(), TOKEN_PASSWORD
            )

    def _request(
        self, method: str, url: str, repository: Repository, version: Optional[str], **kwargs
    ) -> requests.Response:
        """Make a single API request, mapping failures to lookup errors.

        Raises:
            MilestoneNotFoundError: On 404.
            MilestoneAuthError: On 401 or 403.
            MilestoneTransportError: On any other failure.
        """
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise MilestoneTransportError(repository, version, str(e)) from e

        if response.status_code == 404:
            raise MilestoneNotFoundError(repository, version, "repository not visible")
        if response.status_code in (401, 403):
            raise MilestoneAuthError(repository, version, f"HTTP {response.status_code}")
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise MilestoneTransportError(repository, version, str(e)) from e
        return response

    def _list_milestones(self, repository: Repository, version: Optional[str]) -> List[Milestone]:
        url = f"{self.base_url}/repos/{repository.owner}/{repository.name}/milestones"
        response = self._request(
            "GET", url, repository, version, params={"state": "open", "per_page": 100}
        )
        try:
            data = response.json()
            if not isinstance(data, list):
                raise ValueError(f"expected a list of milestones, got {type(data).__name__}")
            return [Milestone.model_validate(item) for item in data]
        except ValueError as e:  # also pydantic ValidationError
            raise MilestoneTransportError(repository, version, f"malformed response: {e}") from e

    def get_milestones(self, repository: Repository) -> List[Milestone]:
        """Get milestones for a repository (open milestones, first page only).

        Args:
            repository: Repository to query.

        Returns:
            List of milestones.
        """
        return self._list_milestones(repository, None)

    def get_milestone(self, repository: Repository, title: str) -> Milestone:
        """Get the milestone whose title equals ``title``.

        Args:
            repository: Repository to query.
            title: Exact milestone title, usually a version such as "1.2.0".

        Returns:
            The matching milestone.

        Raises:
            MilestoneNotFoundError: If no milestone has that title.
        """
        for milestone in self._list_milestones(repository, title):
            if milestone.title == title:
                return milestone
        raise MilestoneNotFoundError(repository, title)

    def close(self):
        """Close the session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
