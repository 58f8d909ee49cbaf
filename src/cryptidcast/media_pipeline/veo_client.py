from __future__ import annotations

import logging
import time
from typing import Any, Callable
from urllib.parse import urlencode, urlparse

from google.genai import types

from cryptidcast.errors import (
    TRANSPORT_FAILURES,
    GenerationTimeout,
    MissingResult,
    RemoteGenerationError,
    TransportError,
)

from .encoding import EncodedImage

logger = logging.getLogger(__name__)


class VeoClient:
    """Image-to-video client for Google's Veo models via the Gemini SDK.

    Submits one job per call and polls it at a fixed interval until the remote
    side reports completion or failure. ``max_wait`` bounds the total time spent
    waiting; leave it as ``None`` to wait for as long as the job runs.
    """

    def __init__(
        self,
        client: Any,
        api_key: str,
        model: str = "veo-3.1-fast-generate-preview",
        resolution: str = "720p",
        aspect_ratio: str = "16:9",
        number_of_videos: int = 1,
        poll_interval: float = 5.0,
        max_wait: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client
        self.api_key = api_key
        self.model = model
        self.resolution = resolution
        self.aspect_ratio = aspect_ratio
        self.number_of_videos = number_of_videos
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self._sleep = sleep

    def generate_video(self, visual_prompt: str, image: EncodedImage) -> str:
        logger.info("🚀  Submitting Veo job to %s (%s, %s).", self.model, self.resolution, self.aspect_ratio)
        operation = self._call(
            self.client.models.generate_videos,
            model=self.model,
            prompt=visual_prompt,
            image=types.Image(image_bytes=image.to_bytes(), mime_type=image.mime_type),
            config=types.GenerateVideosConfig(
                number_of_videos=self.number_of_videos,
                resolution=self.resolution,
                aspect_ratio=self.aspect_ratio,
            ),
        )
        response = self._poll_until_complete(operation)
        uri = self._extract_uri(response)
        logger.info("✅  Veo job %s finished.", getattr(operation, "name", "<unnamed>"))
        return self._authorize(uri)

    # Internal helpers -------------------------------------------------

    def _poll_until_complete(self, operation: Any) -> Any:
        current = operation
        waited = 0.0
        polls = 0
        while not current.done:
            if self.max_wait is not None and waited >= self.max_wait:
                raise GenerationTimeout(
                    f"Veo operation {getattr(current, 'name', '<unnamed>')} timed out after {self.max_wait} seconds"
                )
            self._sleep(self.poll_interval)
            waited += self.poll_interval
            polls += 1
            logger.info("⏳  Waiting for Veo render (poll %d, %.0fs elapsed)…", polls, waited)
            current = self._call(self.client.operations.get, operation=current)

        if current.error:
            message = _error_message(current.error)
            logger.error("Veo job %s failed: %s", getattr(current, "name", "<unnamed>"), message)
            raise RemoteGenerationError(message)

        return current.response

    def _extract_uri(self, response: Any) -> str:
        videos = getattr(response, "generated_videos", None) or []
        if not videos:
            raise MissingResult("Veo response did not include generated videos")
        video_asset = getattr(videos[0], "video", None)
        uri = getattr(video_asset, "uri", None)
        if not uri:
            raise MissingResult("Veo response missing a downloadable video URI")
        return uri

    def _authorize(self, uri: str) -> str:
        separator = "&" if urlparse(uri).query else "?"
        return f"{uri}{separator}{urlencode({'key': self.api_key})}"

    def _call(self, method: Callable[..., Any], **kwargs: Any) -> Any:
        try:
            return method(**kwargs)
        except TRANSPORT_FAILURES as exc:
            logger.error("Veo request failed: %s", exc)
            raise TransportError(f"Video request failed: {exc}") from exc


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        message = error.get("message")
    else:
        message = getattr(error, "message", None)
    return str(message or error or "Video generation failed")
