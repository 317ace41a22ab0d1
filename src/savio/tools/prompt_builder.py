"""Instruction templates for the Gemini analyze, clone and expand calls.

Every function here is a pure string template: the same inputs always
render the same text. The duration rules and verification lines are
instructions for the model only; nothing in this module checks that the
reply obeys them.
"""

from typing import NamedTuple, Optional

from ..models.controls import ControlsState, VoiceDialect


VEO_DURATION = "8.00"
SORA_EXPAND_DURATION = "15.00"


class InstructionSet(NamedTuple):
    """System instruction plus the task text sent next to the media."""
    system_instruction: str
    user_instruction: str


def format_duration(duration: float) -> str:
    """Two-decimal rendering used for every duration in the instructions."""
    return f"{duration:.2f}"


def build_controls_context(
    controls: ControlsState,
    for_clone: bool = False,
    duration: Optional[float] = None,
) -> str:
    """Render the advanced controls block shared by all instructions.

    Args:
        controls: Current advanced controls
        for_clone: Add the clone-mode clause
        duration: Source duration in seconds (clone clause only)

    Returns:
        Multi-line controls context
    """
    context = "Apply the following user-defined advanced controls:\n"
    context += f"- Detail Level: {controls.detail_level.value}\n"
    context += f"- Analysis Type: {controls.analysis_type.value}\n"
    context += f"- Desired Mood: {controls.video_mood.value}\n"
    if controls.lighting_styles:
        context += f"- Lighting & Cinematography: {', '.join(s.value for s in controls.lighting_styles)}\n"
    if controls.camera_styles:
        context += f"- Camera Styles: {', '.join(s.value for s in controls.camera_styles)}\n"

    context += (
        f"- Voice-over Settings: Use a {controls.voice_tone.value} tone "
        f"in the {controls.voice_dialect.display_name} dialect.\n"
    )

    if for_clone and duration:
        context += "- Clone Mode Settings:\n"
        context += f"  - The original video is {format_duration(duration)} seconds long."
        if controls.clone_settings.preserve_structure:
            context += " Faithfully preserve the original scene order, pacing, and camera work when adapting the content.\n"
        else:
            context += " Creatively adapt the content based on the original structure.\n"

    return context


def _verification_lines(duration_text: str) -> str:
    return (
        f"      - For SORA 2: 'Original video duration detected: {duration_text} seconds — "
        f"Scene count: [scene_count] — Final prompt duration matched: {duration_text} seconds.'\n"
        f"      - For VEO 3.1: 'Original video duration detected: {duration_text} seconds — "
        f"Scene count: [scene_count] — Final prompt duration matched: {VEO_DURATION} seconds.'"
    )


def _analyze_voice_over_section(dialect: VoiceDialect) -> str:
    if dialect == VoiceDialect.ENGLISH:
        script = "Write an expressive English voice-over script."
    else:
        script = (
            f"Write an expressive {dialect.display_name} voice-over script. "
            f"The script must be purely in the {dialect.value} dialect. "
            "Do not add any English translations or text in parentheses."
        )
    return (
        f"🗣️ **Voice-over ({dialect.value}):**\n"
        f"    - {script}\n"
        "    - The script must be perfectly synchronized to each scene’s time window and the prompt's total duration.\n"
        '    - For each line of dialogue, prefix it with the corresponding scene\'s time range (e.g., "- **0.00-2.15s:** Dialogue line.").'
    )


def _clone_voice_over_section(dialect: VoiceDialect, duration_text: str) -> str:
    if dialect == VoiceDialect.ENGLISH:
        script = "Write a voice-over script in English."
    else:
        script = (
            f"Write a voice-over script in the {dialect.display_name} dialect. "
            f"The script must be purely in the {dialect.value} dialect, "
            "with no English translations in parentheses."
        )
    return (
        f"🗣️ **Voice-over ({dialect.value}):**\n"
        f"    - {script}\n"
        f"    - The script must be perfectly synchronized to the prompt's specific duration "
        f"({duration_text}s for SORA 2, {VEO_DURATION}s for VEO 3.1).\n"
        '    - For each line of dialogue, prefix it with the corresponding scene\'s time range (e.g., "- **0.00-2.15s:** Dialogue line.").'
    )


def build_analyze_instructions(
    controls: ControlsState,
    optional_context: str,
    duration: float,
) -> InstructionSet:
    """Render the instructions for the trend analysis operation.

    SORA 2 prompts must match the source duration exactly; VEO 3.1 prompts
    are always 8.00 seconds.
    """
    sora_duration = format_duration(duration)
    voice_over_section = _analyze_voice_over_section(controls.voice_dialect)

    system_instruction = f"""You are SAVIO AI, a specialist video trend analyst. Your primary function is to analyze a provided video and generate creative prompts for SORA 2 and VEO 3.1. Adherence to the following duration rules is your most critical, non-negotiable instruction.

**Duration Enforcement Logic — SORA 2 & VEO 3.1**

🔹 **For SORA 2 (Exact Duration Match):**
- The prompt **must** always match the **exact duration** of the uploaded video, which is **{sora_duration} seconds**.
- Example: If the video is 9.40s, the prompt header must be "🎬 SORA 2 Prompt (9.40 seconds)".
- There is **no rounding**. Do not extend or shorten the duration.
- The scene-by-scene breakdown must precisely match the pacing and emotion of the original content. All scene timestamps must sum up to exactly {sora_duration}s.

🔹 **For VEO 3.1 (Fixed 8-Second Adaptation):**
- The total prompt duration **must be exactly {VEO_DURATION} seconds — always.**
- Regardless of the original video’s length, you must **intelligently condense or redistribute scenes** to fit perfectly into the {VEO_DURATION}-second timeline.
- The final scene breakdown must remain coherent, cinematic, and have a natural flow. Avoid fast cuts or unnatural compression.
- Recalculate all timestamps precisely so the final prompt header reads: "🎬 VEO 3.1 Prompt ({VEO_DURATION} seconds)".

**General Prompt Generation Rules:**

1.  **Analysis:** Internally analyze the video's speech, visuals, scenes, pacing, audio, and emotion to inform your prompt creation.
2.  **Prompt Content:** Generate 3 creative prompts (Closest Match, Enhanced, Trend-Shift). For each, provide a plain text version and the structured SORA 2 / VEO 3.1 versions.
3.  **Mandatory Structure:** Both structured prompts MUST use this exact markdown format:

    🎬 **[MODEL NAME] Prompt ([Correct Duration] seconds)**
    A cinematic, vivid, and emotionally expressive description of the entire video in one cohesive paragraph.

    🧩 **Scene-by-Scene Breakdown:**
    - Divide the video into an appropriate number of scenes.
    - For each scene, include a precise duration range (e.g., 0.00–2.15s) and a cinematic description.
    - The sum of scene durations MUST equal the prompt's total required duration for that model.

    {voice_over_section}

4.  **Verification & Correction (Mandatory):**
    - You **must** validate your own output before finalizing. Correct any duration mismatch.
    - At the end of EACH prompt, append the correct verification line on a new line:
{_verification_lines(sora_duration)}

Finally, generate 4-6 relevant hashtags and respond with the complete JSON."""

    controls_context = build_controls_context(controls, for_clone=False)
    user_instruction = (
        f"Analyze the uploaded video. The original video's duration is precisely {sora_duration} seconds. "
        f"Adhere strictly to the Timing Enforcement Rule: SORA 2 prompts must be exactly {sora_duration}s, "
        f"and VEO 3.1 prompts must be exactly {VEO_DURATION}s. "
        f"Use the 'optional_context' if provided: '{optional_context}'.\n\n"
        f"{controls_context}\n\n"
        f"Performance Mode is '{controls.performance_mode.value}'. Output the results in the required JSON format."
    )

    return InstructionSet(system_instruction, user_instruction)


def build_clone_instructions(controls: ControlsState, duration: float) -> InstructionSet:
    """Render the instructions for the clone operation.

    SORA 2 gets a perfect clone at the source duration, VEO 3.1 an
    8.00-second adaptation.
    """
    precise_duration = format_duration(duration)
    system_instruction = (
        "You are an expert video analyst and prompt engineer. Your task is to generate one perfect clone "
        "prompt for SORA 2 and one optimized adaptation for VEO 3.1 from a source video. You must strictly "
        "follow all user-defined controls and duration rules. Your output must be a JSON object adhering "
        "to the provided schema."
    )

    controls_context = build_controls_context(controls, for_clone=True, duration=duration)
    voice_over_section = _clone_voice_over_section(controls.voice_dialect, precise_duration)

    user_instruction = f"""
Analyze the provided video, which is precisely {precise_duration} seconds long. Your task is to generate one perfect clone prompt for SORA 2 and one optimized adaptation for VEO 3.1, strictly following the rules below.

**User's Advanced Controls to Apply:**
{controls_context}

**Duration Enforcement Logic — SORA 2 & VEO 3.1**

🔹 **For SORA 2 (Perfect Clone):**
- The SORA 2 prompt you generate **must be a perfect clone**.
- Its total duration **must exactly match the original video's duration ({precise_duration}s)**. No rounding allowed.
- Faithfully recreate the scene-by-scene breakdown, matching the pacing, emotion, and camera work of the original content.
- All scene timestamps must sum up to exactly {precise_duration}s.

🔹 **For VEO 3.1 (Optimized 8-Second Adaptation):**
- The total prompt duration **must be exactly {VEO_DURATION} seconds — always.**
- Intelligently condense or redistribute scenes from the original video to fit perfectly into the {VEO_DURATION}-second timeline.
- The final breakdown must remain coherent, cinematic, and have a natural flow. Avoid fast cuts or unnatural compression.
- Recalculate all timestamps precisely. The header must read "🎬 VEO 3.1 Prompt ({VEO_DURATION} seconds)".

**General Prompt Requirements:**

1.  **Structure:** Both prompts MUST follow this exact markdown structure:

    🎬 **[MODEL NAME] Prompt ([Correct Duration] seconds)**
    A cinematic, vivid description of the entire video.

    🧩 **Scene-by-Scene Breakdown:**
    - Divide the video into scenes with clear timecodes.
    - Include a cinematic description for each scene.
    - The sum of scene durations must equal the prompt's required duration.

    {voice_over_section}

2.  **Verification & Correction (Mandatory):**
    - You **must** validate your own output before finalizing. Correct any duration mismatch.
    - At the end of EACH prompt, append the correct verification line on a new line:
{_verification_lines(precise_duration)}

Now, analyze the video, apply all rules, and return the final JSON.
"""

    return InstructionSet(system_instruction, user_instruction)


_EXPAND_SYSTEM_INSTRUCTION = (
    "You are a professional video prompt engineer. Your task is to take a core video idea and expand it "
    "into a complete, structured video prompt for either SORA 2 or VEO 3.1. You must strictly adhere to "
    "the requested duration and the detailed markdown format provided in the user prompt, which includes "
    "a cinematic summary, a scene-by-scene breakdown, and an Egyptian Arabic voice-over. Your output must "
    "be a single block of text containing only the formatted prompt."
)

# (model label, duration, scene range, summary adjective)
_EXPAND_TARGETS = {
    "sora": ("SORA 2", SORA_EXPAND_DURATION, "3–6", "cinematic"),
    "veo": ("VEO 3.1", VEO_DURATION, "2–4", "dynamic"),
}


def build_expand_instructions(plain_prompt: str, target: str) -> InstructionSet:
    """Render instructions that expand a plain idea into a full model prompt.

    Args:
        plain_prompt: Core video idea in plain language
        target: 'sora' (15.00s prompt) or 'veo' (8.00s prompt)

    Raises:
        ValueError: If target is not 'sora' or 'veo'
    """
    if target not in _EXPAND_TARGETS:
        raise ValueError(f"Unknown prompt target: {target}. Valid options: {sorted(_EXPAND_TARGETS)}")
    model_label, duration_text, scene_range, adjective = _EXPAND_TARGETS[target]
    seconds = duration_text.split(".")[0]

    user_instruction = f"""
Based on the following core video idea: "{plain_prompt}"

Generate a complete and professional {seconds}-second video prompt formatted for the {model_label} model, using the following structure precisely.

🎬 **{model_label} Prompt ({duration_text} seconds)**
A {adjective}, vivid, and emotionally expressive description of the entire video in one cohesive paragraph. Capture the mood, movement, and details naturally, ensuring it sounds like a real {model_label}-style video prompt.

🧩 **Scene-by-Scene Breakdown:**
Divide the video into {scene_range} short scenes totaling exactly {duration_text} seconds. Each scene must include:
- Duration range in seconds (e.g., 0.00–2.15s).
- Camera style or angle (e.g., static medium shot, handheld close-up, drone wide shot).
- A cinematic and concise description of actions, emotions, environment, and lighting.

🗣️ **Voice-over (Egyptian Arabic):**
Write a natural, expressive Egyptian Arabic voice-over script that matches the tone of the video. The script must be timed to fit the exact {duration_text}-second duration. Use natural spoken Egyptian expressions and timing cues that sound authentic. For example, the tone could be playful, emotional, or cinematic (e.g., "بام!... برافو!... أيوه!... هايل!... (ثم ضحك خفيف في النهاية).").
"""

    return InstructionSet(_EXPAND_SYSTEM_INSTRUCTION, user_instruction)
