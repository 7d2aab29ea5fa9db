# mediagen/services/media_backend.py
"""
Capability shared by every media generation backend: `generate` and `get_status`.

A chat-completion backend answers inline, so `generate` returns the final
ExtractionResult and `get_status` is rejected outright. A queued backend only
records the job; `generate` returns a submitted TaskStatus and `get_status`
reports how far the job got.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Protocol, Sequence, Union

from pydantic import BaseModel

from ..models.media_models import (
    MediaKind, ExtractionRequest, ExtractionResult, ExtractionFailure, TaskStatus,
)
from ..models.options_models import (
    GenerationOptions, ImageOptions, VideoOptions, OptionModifier, EXTRACTION_OPTIONS, apply_modifiers,
)
from .orchestrator import extract_media_url
from .errors import UrlNotFoundError, UnsupportedOperationError, TaskNotFoundError
from .task_store import TaskStore

log = logging.getLogger("mediagen")

DEFAULT_MEDIA_OPTIONS: Dict[MediaKind, BaseModel] = {
    MediaKind.image: ImageOptions(),
    MediaKind.video: VideoOptions(),
}


class TextGenerator(Protocol):
    def generate_text(self, user_prompt: str, system_prompt: str, options: GenerationOptions) -> str: ...


class MediaBackend(ABC):
    kind: MediaKind

    @abstractmethod
    def generate(self, prompt: str, modifiers: Sequence[OptionModifier] = ()) -> Union[ExtractionResult, TaskStatus]:
        ...

    @abstractmethod
    def get_status(self, task_id: str) -> Union[ExtractionResult, TaskStatus]:
        ...


class ChatMediaBackend(MediaBackend):
    """Asks a chat model for the media URL and digs it out of the answer."""

    system_prompt: str = ""

    def __init__(self, text_client: TextGenerator, text_modifiers: Sequence[OptionModifier] = ()):
        self.text_client = text_client
        self.text_modifiers = list(text_modifiers)

    @abstractmethod
    def build_user_prompt(self, prompt: str, options: BaseModel) -> str:
        ...

    def extraction_request(self, text: str) -> ExtractionRequest:
        if self.kind == MediaKind.image:
            return ExtractionRequest.for_image(text)
        return ExtractionRequest.for_video(text)

    def generate(self, prompt: str, modifiers: Sequence[OptionModifier] = ()) -> ExtractionResult:
        options = apply_modifiers(DEFAULT_MEDIA_OPTIONS[self.kind], modifiers)
        user_prompt = self.build_user_prompt(prompt, options)
        text_options = apply_modifiers(EXTRACTION_OPTIONS, self.text_modifiers)

        # upstream errors propagate as-is
        text = self.text_client.generate_text(user_prompt, self.system_prompt, text_options)

        outcome = extract_media_url(self.extraction_request(text))
        if isinstance(outcome, ExtractionFailure):
            raise UrlNotFoundError(self.kind, outcome)
        log.info(f"[{self.kind.value}] resolved url len={len(outcome.resolved_url)}")
        return outcome

    def get_status(self, task_id: str) -> ExtractionResult:
        raise UnsupportedOperationError(f"not supported for chat-based {self.kind.value} client")


class QueuedMediaBackend(MediaBackend):
    """Job-submission variant: work happens later, callers poll for the outcome."""

    def __init__(self, kind: MediaKind, store: TaskStore):
        self.kind = kind
        self.store = store

    def generate(self, prompt: str, modifiers: Sequence[OptionModifier] = ()) -> TaskStatus:
        options = apply_modifiers(DEFAULT_MEDIA_OPTIONS[self.kind], modifiers)
        task_id = self.store.submit(self.kind, prompt, options.model_dump())
        return self.get_status(task_id)

    def get_status(self, task_id: str) -> TaskStatus:
        status = self.store.get(task_id)
        if status is None or status.kind != self.kind:
            raise TaskNotFoundError(task_id)
        return status
