from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Optional

from google import genai
from pydantic import BaseModel, Field

from cryptidcast.credentials import resolve_api_key
from cryptidcast.media_pipeline.veo_client import VeoClient
from cryptidcast.script_engine.engine import ScriptEngine
from cryptidcast.studio import ApplicationState, Studio

logger = logging.getLogger(__name__)


class StudioConfig(BaseModel):
    api_key_env: str = "API_KEY"
    api_key_parameter: Optional[str] = None
    script_model: str = "gemini-2.5-flash"
    include_video: bool = True
    # Veo configuration
    video_model: str = "veo-3.1-fast-generate-preview"
    video_resolution: str = "720p"
    video_aspect_ratio: str = "16:9"
    poll_interval: float = Field(default=5.0, gt=0)
    max_wait: Optional[float] = Field(default=None, gt=0)

    @classmethod
    def from_file(cls, path: Path) -> "StudioConfig":
        text = path.read_text(encoding="utf-8")
        try:
            payload = json.loads(text)
        except json.JSONDecodeError:
            import yaml  # type: ignore[import-not-found]

            payload = yaml.safe_load(text)
        return cls.model_validate(payload or {})

    def resolve_api_key(self) -> str:
        return resolve_api_key(self.api_key_env, self.api_key_parameter)

    def build_studio(
        self,
        api_key: str | None = None,
        client: genai.Client | None = None,
        on_change: Callable[[ApplicationState], None] | None = None,
    ) -> Studio:
        key = api_key or self.resolve_api_key()
        client = client or genai.Client(api_key=key)
        script_engine = ScriptEngine(client=client, model=self.script_model)
        video_client = None
        if self.include_video:
            video_client = VeoClient(
                client=client,
                api_key=key,
                model=self.video_model,
                resolution=self.video_resolution,
                aspect_ratio=self.video_aspect_ratio,
                poll_interval=self.poll_interval,
                max_wait=self.max_wait,
            )
        logger.info(
            "Built studio with script model %s%s",
            self.script_model,
            f" and video model {self.video_model}" if video_client else " (script only)",
        )
        return Studio(script_engine=script_engine, video_client=video_client, on_change=on_change)
