"""Errors raised by the capture pipeline.

Every error is terminal for a single capture: nothing is retried and no
artifact is produced.
"""


class PipelineError(Exception):
    """Base class for capture failures."""


class MissingSource(PipelineError):
    """No frame was available to capture."""


class EmptyFrameError(PipelineError):
    """A zero-area crop or buffer reached a stage that needs pixels."""


class EncodingFailure(PipelineError):
    """The final buffer could not be converted to image bytes."""
