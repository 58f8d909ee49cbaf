from __future__ import annotations

from textwrap import dedent

from google.genai import types

from .model import Speaker

SCRIPT_PROMPT_TEMPLATE = dedent(
    """
    Create a short dialogue script (approx 8 seconds when spoken) between a Human Podcast Host and Bigfoot.
    Topic: "Unhinged humor".
    Characters:
    - Human: Serious, investigative journalist, trying to keep it professional but confused.
    - Bigfoot: Calm, philosophical, but says completely bizarre/unhinged things casually.
    {image_block}
    Also, generate a detailed "visualPrompt" that describes a cinematic video shot of these two sitting at a table
    with microphones in a dim, moody room.
    This visual prompt will be fed into an AI video generator.

    Return strictly JSON.
    """
)

IMAGE_CONTEXT_BLOCK = (
    "\nThe attached image is the reference for the scene. Incorporate what it shows "
    "(the characters, their look, the setting) into both the dialogue and the visualPrompt.\n"
)


def render_script_prompt(with_image: bool = False) -> str:
    return SCRIPT_PROMPT_TEMPLATE.format(image_block=IMAGE_CONTEXT_BLOCK if with_image else "")


def script_response_schema() -> types.Schema:
    """Response-format contract handed to the text endpoint."""
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "dialogue": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(
                    type=types.Type.OBJECT,
                    properties={
                        "speaker": types.Schema(
                            type=types.Type.STRING,
                            enum=[speaker.value for speaker in Speaker],
                        ),
                        "text": types.Schema(type=types.Type.STRING),
                    },
                    required=["speaker", "text"],
                ),
            ),
            "visualPrompt": types.Schema(
                type=types.Type.STRING,
                description="A highly descriptive prompt for a video generation model.",
            ),
        },
        required=["dialogue", "visualPrompt"],
    )
