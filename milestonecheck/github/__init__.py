"""GitHub integration for fetching milestone data."""

from milestonecheck.github.auth import BasicAuthFilter
from milestonecheck.github.client import GitHubClient
from milestonecheck.github.models import Credential, Milestone, Repository

__all__ = [
    "BasicAuthFilter",
    "GitHubClient",
    "Credential",
    "Milestone",
    "Repository",
]
