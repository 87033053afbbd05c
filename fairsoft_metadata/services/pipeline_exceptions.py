"""Custom exceptions for the metadata pipeline."""
from __future__ import annotations

from fairsoft_metadata.services.github.exceptions import (
    GithubConfigurationError,
    GithubError,
)


class PipelineError(Exception):
    """Base exception for pipeline failures."""

    kind = "pipeline_error"
    default_status = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code or self.default_status


class PipelineConfigurationError(PipelineError):
    """Raised when required configuration is missing."""

    kind = "configuration_error"


class UpstreamFetchFailure(PipelineError):
    """Raised when a GitHub call the pipeline cannot do without fails."""

    kind = "upstream_fetch_failure"
    default_status = 502


class ParseFailure(PipelineError):
    """Raised when YAML, BibTeX or JSON content is malformed."""

    kind = "parse_failure"
    default_status = 422


class ValidationFailure(PipelineError):
    """Raised when required input is missing or has the wrong shape."""

    kind = "validation_failure"
    default_status = 400


def from_github_error(exc: Exception, action: str) -> PipelineError:
    """Translate a GitHub client error into the pipeline error surfaced to callers."""
    if isinstance(exc, GithubConfigurationError):
        return PipelineConfigurationError(str(exc))
    status_code = exc.status_code if isinstance(exc, GithubError) else None
    return UpstreamFetchFailure(f"{action}: {exc}", status_code=status_code)
