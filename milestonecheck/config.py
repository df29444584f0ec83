"""Configuration utilities."""

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from milestonecheck.github.client import DEFAULT_API_URL, DEFAULT_TIMEOUT
from milestonecheck.github.models import Credential, Repository

TOKEN_ENV = "GITHUB_TOKEN"
API_URL_ENV = "GITHUB_API_URL"
VERSION_ENV = "MILESTONECHECK_VERSION"
TIMEOUT_ENV = "MILESTONECHECK_TIMEOUT"


class ConfigError(ValueError):
    """Invalid or missing configuration."""


@dataclass(frozen=True)
class CheckConfig:
    """Everything one milestone check needs."""

    repository: Repository
    credential: Optional[Credential]
    version: str
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT


def read_version_file(path: Path) -> str:
    """Read a version from the first non-blank line of a file.

    Args:
        path: File written by an earlier release step, e.g. "next-release.txt".

    Returns:
        The version string.

    Raises:
        ConfigError: If the file is missing, unreadable or blank.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read version file {path}: {e}") from e
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    raise ConfigError(f"Version file {path} is empty")


def _parse_timeout(value) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Timeout must be a number, got '{value}'") from e
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigError(f"Timeout must be a positive finite number, got {timeout}")
    return timeout


def load_config(
    repo: str,
    version: Optional[str] = None,
    version_file: Optional[Path] = None,
    token: Optional[str] = None,
    api_url: Optional[str] = None,
    timeout: Optional[float] = None,
    env: Optional[Mapping[str, str]] = None,
) -> CheckConfig:
    """Resolve a CheckConfig from explicit values, falling back to the environment.

    Precedence for the version: ``version``, then ``version_file``, then
    $MILESTONECHECK_VERSION. The token falls back to $GITHUB_TOKEN; a blank
    token means anonymous access.

    Raises:
        ConfigError: On a malformed repository, missing version or bad timeout.
    """
    if env is None:
        env = os.environ

    try:
        repository = Repository.parse(repo)
    except ValueError as e:
        raise ConfigError(str(e)) from e

    if version is not None and version.strip():
        resolved_version = version.strip()
    elif version_file is not None:
        resolved_version = read_version_file(version_file)
    elif env.get(VERSION_ENV, "").strip():
        resolved_version = env[VERSION_ENV].strip()
    else:
        raise ConfigError(
            f"No version given. Pass --version, --version-file or set {VERSION_ENV}."
        )

    credential = Credential.from_token(token if token is not None else env.get(TOKEN_ENV))

    if timeout is None:
        timeout = env.get(TIMEOUT_ENV, DEFAULT_TIMEOUT)

    return CheckConfig(
        repository=repository,
        credential=credential,
        version=resolved_version,
        api_url=api_url or env.get(API_URL_ENV) or DEFAULT_API_URL,
        timeout=_parse_timeout(timeout),
    )


def get_runs_dir() -> Path:
    """Get runs directory path (project-relative runs/).

    Returns:
        Path to runs directory.
    """
    runs_dir = Path("runs")
    runs_dir.mkdir(parents=True, exist_ok=True)
    return runs_dir
