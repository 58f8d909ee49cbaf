from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict

from cryptidcast.errors import CryptidcastError, ReadError
from cryptidcast.media_pipeline.encoding import EncodedImage, ImageResource, encode_image
from cryptidcast.media_pipeline.veo_client import VeoClient
from cryptidcast.script_engine.engine import ScriptEngine
from cryptidcast.script_engine.model import ScriptResponse

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class GenerationStatus(str, Enum):
    IDLE = "IDLE"
    GENERATING_SCRIPT = "GENERATING_SCRIPT"
    GENERATING_VIDEO = "GENERATING_VIDEO"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


IN_PROGRESS = frozenset({GenerationStatus.GENERATING_SCRIPT, GenerationStatus.GENERATING_VIDEO})


class ApplicationState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: GenerationStatus = GenerationStatus.IDLE
    script: Optional[ScriptResponse] = None
    video_url: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.status in IN_PROGRESS


class Studio:
    """Drives one session from a selected image to a script and, optionally, a video.

    The video stage runs only when a ``video_client`` is supplied. Every
    failure from either client ends the attempt in ``ERROR``; calling
    :meth:`generate` again starts over.
    """

    def __init__(
        self,
        script_engine: ScriptEngine,
        video_client: VeoClient | None = None,
        on_change: Callable[[ApplicationState], None] | None = None,
    ) -> None:
        self.script_engine = script_engine
        self.video_client = video_client
        self._on_change = on_change
        self._image: EncodedImage | None = None
        self._state = ApplicationState()

    @property
    def state(self) -> ApplicationState:
        return self._state

    @property
    def selected_image(self) -> EncodedImage | None:
        return self._image

    @property
    def includes_video(self) -> bool:
        return self.video_client is not None

    def select_image(self, resource: ImageResource, mime_type: str | None = None) -> ApplicationState:
        if self._state.is_loading:
            logger.debug("Image selection during generation; ignoring")
            return self._state
        try:
            image = encode_image(resource, mime_type)
        except ReadError as exc:
            logger.error("Could not load selected image: %s", exc)
            self._image = None
            return self._transition(ApplicationState(status=GenerationStatus.ERROR, error=str(exc)))
        self._image = image
        logger.info("Selected %s image; state reset", image.mime_type)
        return self._transition(ApplicationState())

    def generate(self) -> ApplicationState:
        image = self._image
        if image is None:
            logger.debug("Generation requested without a selected image; ignoring")
            return self._state
        if self._state.is_loading:
            logger.debug("Generation already in progress; ignoring")
            return self._state

        try:
            self._transition(ApplicationState(status=GenerationStatus.GENERATING_SCRIPT))
            script = self.script_engine.generate_script(image)
            if self.video_client is None:
                return self._transition(ApplicationState(status=GenerationStatus.COMPLETED, script=script))

            self._transition(ApplicationState(status=GenerationStatus.GENERATING_VIDEO, script=script))
            video_url = self.video_client.generate_video(script.visual_prompt, image)
            return self._transition(
                ApplicationState(status=GenerationStatus.COMPLETED, script=script, video_url=video_url)
            )
        except CryptidcastError as exc:
            logger.error("Generation failed during %s: %s", self._state.status.value, exc)
            return self._fail(str(exc) or UNEXPECTED_ERROR_MESSAGE)
        except Exception:
            logger.exception("Unexpected failure during %s", self._state.status.value)
            return self._fail(UNEXPECTED_ERROR_MESSAGE)

    def _fail(self, message: str) -> ApplicationState:
        return self._transition(
            self._state.model_copy(update={"status": GenerationStatus.ERROR, "error": message})
        )

    def _transition(self, new_state: ApplicationState) -> ApplicationState:
        if new_state.status != self._state.status:
            logger.info("Studio state %s → %s", self._state.status.value, new_state.status.value)
        self._state = new_state
        if self._on_change is not None:
            self._on_change(new_state)
        return new_state
