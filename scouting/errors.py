"""Error taxonomy shared by the synthesis core and its collaborators."""

from __future__ import annotations


class ScoutingError(Exception):
    """Base class for every error raised by the scouting package."""


class ValidationError(ScoutingError, ValueError):
    """A mandatory identifier or input is missing or malformed."""


class NotFoundError(ScoutingError):
    """An upstream team or series lookup yielded nothing."""


class UpstreamError(ScoutingError):
    """The data provider failed for reasons unrelated to existence."""


class InsufficientDataError(ScoutingError):
    """No series were found for a team, so no report can be built."""


class PipelineStageError(ScoutingError):
    """A mandatory pipeline stage failed.

    The stage name is kept so callers can tell which step aborted; the
    original error is chained as ``__cause__``.
    """

    def __init__(self, stage: str, error: Exception):
        super().__init__(f"failed to {stage}: {error}")
        self.stage = stage
        self.error = error
