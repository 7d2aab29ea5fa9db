# mediagen/services/image_client.py
from typing import Sequence

from ..models.media_models import MediaKind, ExtractionResult
from ..models.options_models import ImageOptions, OptionModifier
from .media_backend import ChatMediaBackend

IMAGE_SYSTEM_PROMPT = (
    "Generate the image using the provided model. Respond with JSON only. "
    "Return one of these fields: image_url, url, or data[0].url. No markdown."
)


def build_image_prompt(prompt: str, options: ImageOptions) -> str:
    user_prompt = prompt
    if options.negative_prompt:
        user_prompt += "\n\nNegative prompt: " + options.negative_prompt
    if options.size:
        user_prompt += "\n\nImage size: " + options.size
    return user_prompt


class ChatImageClient(ChatMediaBackend):
    kind = MediaKind.image
    system_prompt = IMAGE_SYSTEM_PROMPT

    def build_user_prompt(self, prompt: str, options: ImageOptions) -> str:
        return build_image_prompt(prompt, options)

    def generate_image(self, prompt: str, modifiers: Sequence[OptionModifier] = ()) -> ExtractionResult:
        return self.generate(prompt, modifiers)

    def get_task_status(self, task_id: str) -> ExtractionResult:
        return self.get_status(task_id)
