# mediagen/models/options_models.py
from typing import Any, Callable, Dict, Mapping, Sequence, TypeVar
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T", bound=BaseModel)

# A modifier takes an options value and returns a new one; it never mutates its input.
OptionModifier = Callable[[T], T]


class GenerationOptions(BaseModel):
    """Knobs sent along with a single text-generation call."""
    model_config = ConfigDict(frozen=True)

    temperature: float = 0.7
    max_output_size: int = 1000
    extra_fields: Dict[str, Any] = Field(default_factory=dict)


class ImageOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    size: str = "1024x1024"
    quality: str = "standard"
    negative_prompt: str = ""


class VideoOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    duration: int = 4               # seconds
    aspect_ratio: str = "16:9"
    reference_image_url: str = ""


# Defaults used for every URL-extraction call, whatever the media kind.
EXTRACTION_OPTIONS = GenerationOptions(temperature=0.2, max_output_size=1200)


def apply_modifiers(base: T, modifiers: Sequence[OptionModifier]) -> T:
    """
    Fold `modifiers` over `base` left to right.
    A later modifier wins over an earlier one touching the same field.
    """
    options = base
    for modify in modifiers:
        options = modify(options)
    return options


def _set(**fields: Any) -> OptionModifier:
    # model_copy skips validation on purpose: range checks belong to the upstream service
    return lambda options: options.model_copy(update=fields)


# --- GenerationOptions ---
def with_temperature(temperature: float) -> OptionModifier:
    return _set(temperature=temperature)


def with_max_output_size(max_output_size: int) -> OptionModifier:
    return _set(max_output_size=max_output_size)


def with_extra_field(key: str, value: Any) -> OptionModifier:
    return lambda options: options.model_copy(
        update={"extra_fields": {**options.extra_fields, key: value}}
    )


# --- ImageOptions ---
def with_size(size: str) -> OptionModifier:
    return _set(size=size)


def with_quality(quality: str) -> OptionModifier:
    return _set(quality=quality)


def with_negative_prompt(negative_prompt: str) -> OptionModifier:
    return _set(negative_prompt=negative_prompt)


# --- VideoOptions ---
def with_duration(duration: int) -> OptionModifier:
    return _set(duration=duration)


def with_aspect_ratio(aspect_ratio: str) -> OptionModifier:
    return _set(aspect_ratio=aspect_ratio)


def with_reference_image(url: str) -> OptionModifier:
    return _set(reference_image_url=url)


def with_overrides(overrides: Mapping[str, Any]) -> OptionModifier:
    """Replay a stored field mapping (e.g. options saved alongside a queued job)."""
    return _set(**dict(overrides))
