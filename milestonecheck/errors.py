"""Errors raised when a milestone cannot be looked up."""

from typing import Optional

from milestonecheck.github.models import Repository


class MilestoneLookupError(LookupError):
    """The milestone could not be retrieved from GitHub."""

    reason = "lookup failed"

    def __init__(
        self,
        repository: Repository,
        version: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        self.repository = repository
        self.version = version
        self.detail = detail
        super().__init__(self._message())

    def _message(self) -> str:
        if self.version is None:
            message = f"{self.reason} for {self.repository.full_name}"
        else:
            message = f"Milestone '{self.version}' {self.reason} in {self.repository.full_name}"
        if self.detail:
            message = f"{message}: {self.detail}"
        return message


class MilestoneNotFoundError(MilestoneLookupError):
    reason = "not found"


class MilestoneAuthError(MilestoneLookupError):
    """Credential rejected, access forbidden or rate limited (401/403)."""

    reason = "authentication failed"


class MilestoneTransportError(MilestoneLookupError):
    """Network error, timeout, unexpected status or malformed response."""

    reason = "transport failure"
