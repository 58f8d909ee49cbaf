from __future__ import annotations

import logging
from typing import Any

from google.genai import types
from pydantic import ValidationError

from cryptidcast.errors import TRANSPORT_FAILURES, EmptyResponse, SchemaViolation, TransportError
from cryptidcast.media_pipeline.encoding import EncodedImage

from .model import ScriptResponse
from .prompts import render_script_prompt, script_response_schema

logger = logging.getLogger(__name__)


class ScriptEngine:
    """Requests the Human/Bigfoot script from a Gemini text model."""

    def __init__(self, client: Any, model: str = "gemini-2.5-flash") -> None:
        self.client = client
        self.model = model

    def generate_script(self, image: EncodedImage | None = None) -> ScriptResponse:
        contents: list[Any] = []
        if image is not None:
            contents.append(types.Part.from_bytes(data=image.to_bytes(), mime_type=image.mime_type))
        contents.append(render_script_prompt(with_image=image is not None))

        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=script_response_schema(),
        )
        logger.info(
            "Requesting script from %s (%s reference image)",
            self.model,
            "with" if image is not None else "without",
        )
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )
        except TRANSPORT_FAILURES as exc:
            logger.error("Script request to %s failed: %s", self.model, exc)
            raise TransportError(f"Script request failed: {exc}") from exc

        raw = getattr(response, "text", None)
        if not raw:
            raise EmptyResponse("Failed to generate script.")
        logger.debug("Script raw response: %s", raw)

        try:
            script = ScriptResponse.model_validate_json(raw)
        except ValidationError as exc:
            logger.error("Invalid script payload: %s", exc)
            raise SchemaViolation(f"Script response did not match the expected schema: {exc}") from exc

        logger.info("Script ready with %d line(s)", len(script.dialogue))
        return script
