# mediagen/models/media_models.py
from enum import Enum
from typing import Optional
from pydantic import BaseModel


class MediaKind(str, Enum):
    image = "image"
    video = "video"


class ExtractionRequest(BaseModel):
    raw_text: str
    media_kind: MediaKind
    # image flows accept inline base64 payloads; video flows never do
    allow_embedded_data: bool = False

    @classmethod
    def for_image(cls, raw_text: str) -> "ExtractionRequest":
        return cls(raw_text=raw_text, media_kind=MediaKind.image, allow_embedded_data=True)

    @classmethod
    def for_video(cls, raw_text: str) -> "ExtractionRequest":
        return cls(raw_text=raw_text, media_kind=MediaKind.video, allow_embedded_data=False)


class ExtractionStatus(str, Enum):
    completed = "completed"


class ExtractionResult(BaseModel):
    status: ExtractionStatus = ExtractionStatus.completed
    resolved_url: str
    is_complete: bool = True


class ExtractionFailure(BaseModel):
    reason: str
    diagnostic_snippet: str


# --- polling backend ---
class TaskState(str, Enum):
    submitted = "submitted"
    running   = "running"
    completed = "completed"
    failed    = "failed"


class TaskStatus(BaseModel):
    task_id: str
    kind: MediaKind
    state: TaskState
    message: Optional[str] = None
    result: Optional[ExtractionResult] = None  # set once state == completed

    @property
    def is_finished(self) -> bool:
        return self.state in (TaskState.completed, TaskState.failed)
