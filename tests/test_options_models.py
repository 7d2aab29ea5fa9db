"""
Tests for generation option values and their modifiers.
"""

import pytest
from pydantic import ValidationError

from mediagen.models.options_models import (
    GenerationOptions, ImageOptions, VideoOptions, EXTRACTION_OPTIONS, apply_modifiers,
    with_temperature, with_max_output_size, with_extra_field, with_size, with_quality,
    with_negative_prompt, with_duration, with_aspect_ratio, with_reference_image, with_overrides,
)


class TestApplyModifiers:

    def test_no_modifiers_returns_base(self):
        assert apply_modifiers(EXTRACTION_OPTIONS, []) == EXTRACTION_OPTIONS

    def test_extraction_defaults(self):
        assert EXTRACTION_OPTIONS.temperature == 0.2
        assert EXTRACTION_OPTIONS.max_output_size == 1200
        assert EXTRACTION_OPTIONS.extra_fields == {}

    def test_later_modifier_wins(self):
        opts = apply_modifiers(EXTRACTION_OPTIONS, [with_temperature(0.9), with_temperature(0.1)])
        assert opts.temperature == 0.1
        assert opts.max_output_size == 1200

    def test_base_is_not_mutated(self):
        apply_modifiers(EXTRACTION_OPTIONS, [with_temperature(1.5), with_extra_field("seed", 7)])
        assert EXTRACTION_OPTIONS.temperature == 0.2
        assert EXTRACTION_OPTIONS.extra_fields == {}

    def test_no_range_validation(self):
        opts = apply_modifiers(EXTRACTION_OPTIONS, [with_temperature(-3.0), with_max_output_size(0)])
        assert opts.temperature == -3.0
        assert opts.max_output_size == 0

    def test_extra_fields_accumulate_and_override(self):
        opts = apply_modifiers(GenerationOptions(), [
            with_extra_field("seed", 1),
            with_extra_field("top_p", 0.5),
            with_extra_field("seed", 2),
        ])
        assert opts.extra_fields == {"seed": 2, "top_p": 0.5}

    def test_value_equality(self):
        a = apply_modifiers(GenerationOptions(), [with_temperature(0.3)])
        b = GenerationOptions(temperature=0.3)
        assert a == b

    def test_options_are_frozen(self):
        with pytest.raises(ValidationError):
            EXTRACTION_OPTIONS.temperature = 1.0


class TestMediaOptions:

    def test_image_defaults(self):
        opts = ImageOptions()
        assert opts.size == "1024x1024"
        assert opts.quality == "standard"
        assert opts.negative_prompt == ""

    def test_video_defaults(self):
        opts = VideoOptions()
        assert opts.duration == 4
        assert opts.aspect_ratio == "16:9"
        assert opts.reference_image_url == ""

    def test_image_modifiers(self):
        opts = apply_modifiers(ImageOptions(), [
            with_size("512x512"), with_quality("hd"), with_negative_prompt("blurry"),
        ])
        assert (opts.size, opts.quality, opts.negative_prompt) == ("512x512", "hd", "blurry")

    def test_video_modifiers(self):
        opts = apply_modifiers(VideoOptions(), [
            with_duration(8), with_aspect_ratio("9:16"), with_reference_image("https://cdn.x/ref.png"),
        ])
        assert (opts.duration, opts.aspect_ratio, opts.reference_image_url) == (8, "9:16", "https://cdn.x/ref.png")

    def test_overrides_replay_a_dump(self):
        original = apply_modifiers(VideoOptions(), [with_duration(10)])
        replayed = apply_modifiers(VideoOptions(), [with_overrides(original.model_dump())])
        assert replayed == original
