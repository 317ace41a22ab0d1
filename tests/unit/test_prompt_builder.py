"""Unit tests for instruction templates."""

import pytest

from savio.models import CameraStyle, ControlsState, LightingStyle, VoiceDialect
from savio.tools.prompt_builder import (
    InstructionSet,
    build_analyze_instructions,
    build_clone_instructions,
    build_controls_context,
    build_expand_instructions,
    format_duration,
)


class TestControlsContext:
    """Test the shared advanced controls block."""

    def test_default_lines(self):
        context = build_controls_context(ControlsState())

        assert context.startswith("Apply the following user-defined advanced controls:\n")
        assert "- Detail Level: Professional\n" in context
        assert "- Analysis Type: Comprehensive\n" in context
        assert "- Desired Mood: Energetic\n" in context
        assert "- Voice-over Settings: Use a Energetic tone in the Egyptian Arabic dialect.\n" in context

    def test_style_lines_omitted_when_empty(self):
        context = build_controls_context(ControlsState())

        assert "Lighting & Cinematography" not in context
        assert "Camera Styles" not in context

    def test_style_lines_keep_selection_order(self):
        controls = (
            ControlsState()
            .toggle_lighting_style(LightingStyle.NEON)
            .toggle_lighting_style(LightingStyle.WARM)
            .toggle_camera_style(CameraStyle.DRONE)
        )
        context = build_controls_context(controls)

        assert "- Lighting & Cinematography: Neon, Warm\n" in context
        assert "- Camera Styles: Drone\n" in context

    def test_english_dialect_has_no_arabic_suffix(self):
        context = build_controls_context(ControlsState(voice_dialect=VoiceDialect.ENGLISH))

        assert "in the English dialect" in context
        assert "Arabic" not in context

    def test_clone_clause_preserve(self):
        context = build_controls_context(ControlsState(), for_clone=True, duration=9.4)

        assert "- Clone Mode Settings:\n" in context
        assert "The original video is 9.40 seconds long." in context
        assert "Faithfully preserve the original scene order" in context

    def test_clone_clause_adapt(self):
        controls = ControlsState(clone_settings={"strict_duration": True, "preserve_structure": False})
        context = build_controls_context(controls, for_clone=True, duration=12)

        assert "The original video is 12.00 seconds long." in context
        assert "Creatively adapt the content based on the original structure." in context

    def test_clone_clause_skipped_without_duration(self):
        context = build_controls_context(ControlsState(), for_clone=True, duration=0)

        assert "Clone Mode Settings" not in context


class TestAnalyzeInstructions:
    """Test the trend analysis instructions."""

    def test_duration_rendering(self):
        instructions = build_analyze_instructions(ControlsState(), "", 9.4)

        assert isinstance(instructions, InstructionSet)
        assert "9.40 seconds" in instructions.system_instruction
        assert "8.00 seconds" in instructions.system_instruction
        assert "SORA 2 prompts must be exactly 9.40s" in instructions.user_instruction
        assert "VEO 3.1 prompts must be exactly 8.00s" in instructions.user_instruction

    def test_optional_context_embedded(self):
        instructions = build_analyze_instructions(ControlsState(), "street food in Cairo", 5.0)

        assert "'street food in Cairo'" in instructions.user_instruction

    def test_controls_and_mode_embedded(self):
        controls = ControlsState(performance_mode="High Quality")
        instructions = build_analyze_instructions(controls, "", 5.0)

        assert "Apply the following user-defined advanced controls:" in instructions.user_instruction
        assert "Performance Mode is 'High Quality'" in instructions.user_instruction
        assert "Clone Mode Settings" not in instructions.user_instruction

    def test_arabic_voice_over(self):
        instructions = build_analyze_instructions(ControlsState(voice_dialect="Lebanese"), "", 5.0)

        assert "Voice-over (Lebanese)" in instructions.system_instruction
        assert "Lebanese Arabic voice-over script" in instructions.system_instruction

    def test_english_voice_over(self):
        instructions = build_analyze_instructions(ControlsState(voice_dialect="English"), "", 5.0)

        assert "Write an expressive English voice-over script." in instructions.system_instruction
        assert "Arabic" not in instructions.system_instruction

    def test_deterministic(self):
        controls = ControlsState().toggle_camera_style("Handheld")

        assert build_analyze_instructions(controls, "x", 7.25) == build_analyze_instructions(controls, "x", 7.25)


class TestCloneInstructions:
    """Test the clone instructions."""

    def test_duration_rendering(self):
        instructions = build_clone_instructions(ControlsState(), 14.333)

        assert "precisely 14.33 seconds long" in instructions.user_instruction
        assert "(14.33s for SORA 2, 8.00s for VEO 3.1)" in instructions.user_instruction
        assert "The original video is 14.33 seconds long." in instructions.user_instruction

    def test_verification_lines(self):
        instructions = build_clone_instructions(ControlsState(), 6.0)

        assert "Final prompt duration matched: 6.00 seconds." in instructions.user_instruction
        assert "Final prompt duration matched: 8.00 seconds." in instructions.user_instruction


class TestExpandInstructions:
    """Test the prompt expander instructions."""

    def test_sora_target(self):
        instructions = build_expand_instructions("a cat surfing", "sora")

        assert '"a cat surfing"' in instructions.user_instruction
        assert "SORA 2 Prompt (15.00 seconds)" in instructions.user_instruction
        assert "15-second" in instructions.user_instruction

    def test_veo_target(self):
        instructions = build_expand_instructions("a cat surfing", "veo")

        assert "VEO 3.1 Prompt (8.00 seconds)" in instructions.user_instruction
        assert "Egyptian Arabic" in instructions.user_instruction

    def test_unknown_target(self):
        with pytest.raises(ValueError):
            build_expand_instructions("idea", "runway")


@pytest.mark.parametrize("duration,expected", [
    (9.4, "9.40"),
    (8, "8.00"),
    (123.456, "123.46"),
])
def test_format_duration(duration, expected):
    assert format_duration(duration) == expected
