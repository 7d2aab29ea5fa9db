# mediagen/services/video_client.py
from typing import Sequence

from ..models.media_models import MediaKind, ExtractionResult
from ..models.options_models import VideoOptions, OptionModifier, with_reference_image
from .media_backend import ChatMediaBackend

VIDEO_SYSTEM_PROMPT = (
    "Generate a video using the provided model. Respond with JSON only. "
    "Return one of these fields: video_url, url, or data[0].url. No markdown."
)


def build_video_prompt(prompt: str, options: VideoOptions) -> str:
    user_prompt = prompt
    if options.reference_image_url:
        user_prompt += "\n\nReference image: " + options.reference_image_url
    if options.duration > 0:
        user_prompt += f"\n\nDuration: {options.duration} seconds"
    if options.aspect_ratio:
        user_prompt += "\n\nAspect ratio: " + options.aspect_ratio
    return user_prompt


class ChatVideoClient(ChatMediaBackend):
    kind = MediaKind.video
    system_prompt = VIDEO_SYSTEM_PROMPT

    def build_user_prompt(self, prompt: str, options: VideoOptions) -> str:
        return build_video_prompt(prompt, options)

    def generate_video(self, image_url: str, prompt: str, modifiers: Sequence[OptionModifier] = ()) -> ExtractionResult:
        return self.generate(prompt, [with_reference_image(image_url), *modifiers])

    def get_task_status(self, task_id: str) -> ExtractionResult:
        return self.get_status(task_id)
