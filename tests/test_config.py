from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from conftest import FakeGenaiClient
from cryptidcast.config import StudioConfig
from cryptidcast.errors import MissingCredentials


def test_defaults():
    config = StudioConfig()

    assert config.api_key_env == "API_KEY"
    assert config.poll_interval == 5.0
    assert config.max_wait is None
    assert config.include_video is True


def test_from_json_file(tmp_path):
    path = tmp_path / "studio.json"
    path.write_text(json.dumps({"script_model": "gemini-test", "max_wait": 300}), encoding="utf-8")

    config = StudioConfig.from_file(path)

    assert config.script_model == "gemini-test"
    assert config.max_wait == 300.0


def test_from_yaml_file(tmp_path):
    path = tmp_path / "studio.yaml"
    path.write_text("include_video: false\nvideo_aspect_ratio: '9:16'\n", encoding="utf-8")

    config = StudioConfig.from_file(path)

    assert config.include_video is False
    assert config.video_aspect_ratio == "9:16"


def test_rejects_non_positive_poll_interval():
    with pytest.raises(ValidationError):
        StudioConfig(poll_interval=0)


def test_build_studio_wires_clients():
    fake = FakeGenaiClient()
    config = StudioConfig(video_model="veo-test", poll_interval=2.0, max_wait=60.0)

    studio = config.build_studio(api_key="SECRET", client=fake)

    assert studio.script_engine.client is fake
    assert studio.video_client.client is fake
    assert studio.video_client.api_key == "SECRET"
    assert studio.video_client.model == "veo-test"
    assert studio.video_client.poll_interval == 2.0
    assert studio.video_client.max_wait == 60.0


def test_build_studio_script_only():
    studio = StudioConfig(include_video=False).build_studio(api_key="SECRET", client=FakeGenaiClient())

    assert studio.video_client is None


def test_build_studio_reads_key_from_env(monkeypatch):
    monkeypatch.setenv("CUSTOM_KEY", "FROM_ENV")

    studio = StudioConfig(api_key_env="CUSTOM_KEY").build_studio(client=FakeGenaiClient())

    assert studio.video_client.api_key == "FROM_ENV"


def test_build_studio_without_key_fails(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)

    with pytest.raises(MissingCredentials):
        StudioConfig().build_studio(client=FakeGenaiClient())
