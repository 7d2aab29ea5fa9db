# mediagen/models/api_models.py
from typing import Optional
from pydantic import BaseModel, Field

from .media_models import MediaKind, TaskState, ExtractionResult


class ImageGenerateIn(BaseModel):
    prompt: str = Field(..., min_length=1)
    size: Optional[str] = None
    quality: Optional[str] = None
    negative_prompt: Optional[str] = None


class VideoGenerateIn(BaseModel):
    prompt: str = Field(..., min_length=1)
    image_url: str = ""
    duration: Optional[int] = None
    aspect_ratio: Optional[str] = None


# --- jobs models ---
class EnqueueResponse(BaseModel):
    job_id: str
    kind: MediaKind
    status: TaskState = TaskState.submitted


class JobPollResponse(BaseModel):
    job_id: str
    kind: MediaKind
    status: TaskState
    message: Optional[str] = None
    result: Optional[ExtractionResult] = None  # 完成后放最终 URL
