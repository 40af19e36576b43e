"""Failure taxonomy for the ingestion pipeline."""

from typing import Optional


class PipelineError(Exception):
    """Base class for all pipeline failures."""


class FetchFailure(PipelineError):
    """A polled source returned a non-2xx status or could not be reached."""

    def __init__(self, source_name: str, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.source_name = source_name
        self.status_code = status_code


class ExtractionFailure(PipelineError):
    """The extraction capability was unreachable or produced nothing usable."""


class AnalysisFailure(PipelineError):
    """The sentiment capability errored or returned an invalid result."""


class ConfigurationFailure(PipelineError):
    """A referenced environment variable or setting is missing."""


class AuthorizationFailure(PipelineError):
    """The scheduled-trigger secret did not match."""
