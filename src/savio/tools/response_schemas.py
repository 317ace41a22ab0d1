"""Response schemas that constrain Gemini's structured JSON replies."""

from google.genai import types

from ..models.analysis import TrendLevel


HASHTAG_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "tag": types.Schema(type=types.Type.STRING, description="The hashtag text, without the '#' symbol."),
        "trend_level": types.Schema(
            type=types.Type.STRING,
            enum=[level.value for level in TrendLevel],
            description="A simulated trend level. Must be one of: 'Very High', 'High', 'Medium', 'Low'.",
        ),
    },
    required=["tag", "trend_level"],
)

PROMPT_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "id": types.Schema(type=types.Type.STRING),
        "label": types.Schema(type=types.Type.STRING),
        "plain_prompt": types.Schema(type=types.Type.STRING),
        "sora_prompt": types.Schema(
            type=types.Type.STRING,
            description="The final SORA prompt. It must end with the required verification line.",
        ),
        "veo_prompt": types.Schema(
            type=types.Type.STRING,
            description="The final VEO prompt. It must end with the required verification line.",
        ),
    },
    required=["id", "label", "plain_prompt", "sora_prompt", "veo_prompt"],
)

# Only these four fields are required; the mapper defaults the rest.
ANALYSIS_REQUIRED_FIELDS = ["trend_summary", "prompts", "hashtags", "scene_count"]

ANALYSIS_OUTPUT_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "trend_summary": types.Schema(
            type=types.Type.STRING,
            description="Concise one-paragraph summary of the video's core idea and why it works.",
        ),
        "genre": types.Schema(type=types.Type.STRING),
        "estimated_duration_seconds": types.Schema(
            type=types.Type.NUMBER,
            description="The exact duration of the original video, repeated here.",
        ),
        "scene_count": types.Schema(
            type=types.Type.NUMBER,
            description="The total number of distinct scenes identified in the video.",
        ),
        "audience_demographics": types.Schema(
            type=types.Type.STRING,
            description="Probable audience slice (e.g., 'youth 16-24, tech-savvy, global').",
        ),
        "success_factors": types.Schema(type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING)),
        "top_keywords": types.Schema(type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING)),
        "hook_suggestion": types.Schema(type=types.Type.STRING),
        "prompts": types.Schema(type=types.Type.ARRAY, items=PROMPT_SCHEMA),
        "hashtags": types.Schema(
            type=types.Type.ARRAY,
            description="A list of 4-6 relevant hashtags with their simulated trend levels.",
            items=HASHTAG_SCHEMA,
        ),
    },
    required=ANALYSIS_REQUIRED_FIELDS,
)

CLONE_REQUIRED_FIELDS = ["sora_prompt_clone", "veo_prompt_clone", "hashtags", "scene_count"]

CLONE_OUTPUT_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "sora_prompt_clone": types.Schema(
            type=types.Type.STRING,
            description="The complete, final, markdown-formatted SORA 2 prompt. It must end with the required verification line.",
        ),
        "veo_prompt_clone": types.Schema(
            type=types.Type.STRING,
            description="The complete, final, markdown-formatted VEO 3.1 prompt. It must end with the required verification line.",
        ),
        "scene_count": types.Schema(
            type=types.Type.NUMBER,
            description="The total number of distinct scenes identified in the original video.",
        ),
        "hashtags": types.Schema(
            type=types.Type.ARRAY,
            description="A list of 4-6 relevant hashtags with their simulated trend levels based on the video content.",
            items=HASHTAG_SCHEMA,
        ),
    },
    required=CLONE_REQUIRED_FIELDS,
)
