"""Pydantic models for the GitHub data this tool reads.

API Reference: https://docs.github.com/en/rest/issues/milestones
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class Repository(BaseModel):
    """A GitHub repository, identified by owner and name."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., min_length=1, description="Repository owner (user or organization)")
    name: str = Field(..., min_length=1, description="Repository name")

    @field_validator("owner", "name")
    @classmethod
    def _no_slash(cls, value: str) -> str:
        value = value.strip()
        if not value or "/" in value:
            raise ValueError("must be a non-empty path segment")
        return value

    @classmethod
    def parse(cls, slug: str) -> "Repository":
        """Build a repository from an "owner/name" slug.

        Raises:
            ValueError: If the slug is not of the form "owner/name".
        """
        parts = slug.strip().split("/")
        if len(parts) != 2:
            raise ValueError(f"Repository must be in format 'owner/name', got '{slug}'")
        return cls(owner=parts[0], name=parts[1])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name


class Credential(BaseModel):
    """A GitHub access token.

    Absence of a credential is ``None``, never an empty token.
    """

    model_config = ConfigDict(frozen=True)

    token: SecretStr

    @field_validator("token")
    @classmethod
    def _not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("token must not be blank")
        return value

    @classmethod
    def from_token(cls, token: Optional[str]) -> Optional["Credential"]:
        """Wrap a raw token, mapping missing or blank values to ``None``."""
        if token is None or not token.strip():
            return None
        return cls(token=token.strip())


class Milestone(BaseModel):
    """GitHub milestone snapshot.

    Maps to the GitHub REST API Milestone object. Unknown fields are ignored.
    """

    title: str = Field(..., description="Milestone title, usually the version")
    number: Optional[int] = Field(None, description="Milestone number within the repository")
    state: Optional[str] = Field(None, description="'open' or 'closed'")
    due_on: Optional[datetime] = Field(None, description="Due date (ISO 8601), absent if unset")
