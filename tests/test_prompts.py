import json
import re

import pytest

from pinpage.models import CONTENT_KINDS, ContentBlock, GenerationConfig
from pinpage.prompts import (
    AVOID_BUTTONS,
    AVOID_IMAGES,
    THEME_GUIDANCE,
    TONE_GUIDANCE,
    build_system_prompt,
    enhance_prompt,
)


def _manual_block(block_id: str) -> ContentBlock:
    return ContentBlock(id=block_id, kind="paragraph", content="Existing")


class TestBuildSystemPrompt:
    def test_lists_every_content_kind(self):
        prompt = build_system_prompt()
        for kind in CONTENT_KINDS:
            assert f"- {kind}:" in prompt

    def test_describes_json_envelope(self):
        prompt = build_system_prompt()
        example = re.search(r"\{\n  \"components\".*?\n\}", prompt, re.DOTALL)

        assert example is not None
        assert json.loads(example.group(0))["components"][0]["type"] == "heading"

    def test_describes_style_action_and_image_fields(self):
        prompt = build_system_prompt()
        for field in ("textAlign", "fontSize", "backgroundColor", "borderRadius", "galleryColumns", "galleryGap"):
            assert field in prompt
        for action in ("'link'", "'alert'", "'confetti'", "'spookyEmojis'", "'singleEmoji'"):
            assert action in prompt
        assert "images:" in prompt

    def test_is_constant(self):
        assert build_system_prompt() == build_system_prompt()


class TestEnhancePrompt:
    def test_starts_with_user_request(self):
        prompt = enhance_prompt("Create a landing page", GenerationConfig())

        assert prompt.split("\n\n")[0] == "User request: Create a landing page"

    @pytest.mark.parametrize("tone", ["professional", "casual", "creative", "minimal"])
    def test_tone_guidance(self, tone):
        prompt = enhance_prompt("Page", GenerationConfig(tone=tone))

        assert f"Tone: {TONE_GUIDANCE[tone]}" in prompt

    def test_dark_theme(self):
        prompt = enhance_prompt("Page", GenerationConfig(theme_preference="dark"))

        assert f"Theme: {THEME_GUIDANCE['dark']}" in prompt
        assert "light text colors on dark backgrounds" in prompt

    def test_light_theme(self):
        prompt = enhance_prompt("Page", GenerationConfig(theme_preference="light"))

        assert "dark text colors on light backgrounds" in prompt

    def test_auto_theme_adds_nothing(self):
        assert "Theme:" not in enhance_prompt("Page", GenerationConfig(theme_preference="auto"))

    def test_preferred_components(self):
        prompt = enhance_prompt("Page", GenerationConfig(preferred_kinds=["heading", "image"]))

        assert "Preferred components: heading, image" in prompt
        assert "Preferred components" not in enhance_prompt("Page", GenerationConfig())

    def test_max_components(self):
        assert "Maximum components: 5" in enhance_prompt("Page", GenerationConfig(max_components=5))
        assert "Maximum components" not in enhance_prompt("Page", GenerationConfig())

    def test_images_and_buttons_only_discouraged_when_false(self):
        disabled = enhance_prompt("Page", GenerationConfig(include_images=False, include_buttons=False))
        enabled = enhance_prompt("Page", GenerationConfig(include_images=True, include_buttons=True))
        unset = enhance_prompt("Page", GenerationConfig())

        assert AVOID_IMAGES in disabled
        assert AVOID_BUTTONS in disabled
        for prompt in (enabled, unset):
            assert AVOID_IMAGES not in prompt
            assert AVOID_BUTTONS not in prompt

    def test_existing_blocks_note(self):
        prompt = enhance_prompt("Page", GenerationConfig(), [_manual_block("m1"), _manual_block("m2")])

        assert "The page already has 2 component(s)" in prompt
        assert "complement" in prompt
        assert "already has" not in enhance_prompt("Page", GenerationConfig(), [])

    def test_sections_follow_fixed_order(self):
        config = GenerationConfig(
            tone="casual",
            theme_preference="dark",
            preferred_kinds=["heading"],
            max_components=3,
            include_images=False,
            include_buttons=False,
        )
        parts = enhance_prompt("Bakery", config, [_manual_block("m1")]).split("\n\n")

        assert parts[0] == "User request: Bakery"
        assert parts[1].startswith("Tone:")
        assert parts[2].startswith("Theme:")
        assert parts[3].startswith("Preferred components:")
        assert parts[4].startswith("Maximum components:")
        assert parts[5] == AVOID_IMAGES
        assert parts[6] == AVOID_BUTTONS
        assert parts[7].startswith("Note: The page already has 1 component(s).")
        assert len(parts) == 8
