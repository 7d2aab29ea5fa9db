# mediagen/services/errors.py
from ..models.media_models import ExtractionFailure, MediaKind


class MediaGenerationError(Exception):
    """Base class for failures raised by the media backends."""


class UrlNotFoundError(MediaGenerationError):
    """The model answered, but no usable URL could be recovered from the answer."""

    def __init__(self, kind: MediaKind, failure: ExtractionFailure):
        self.kind = kind
        self.failure = failure
        super().__init__(f"no {kind.value} url found in response: {failure.diagnostic_snippet}")


class UnsupportedOperationError(MediaGenerationError):
    """The backend never supports this operation (not the same as "not ready yet")."""


class TaskNotFoundError(MediaGenerationError):
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"task not found: {task_id}")


class InvalidTransitionError(MediaGenerationError):
    def __init__(self, task_id: str, current: str, target: str):
        self.task_id = task_id
        super().__init__(f"task {task_id}: cannot move from {current} to {target}")
