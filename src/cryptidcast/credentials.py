from __future__ import annotations

import abc
import getpass
import logging
import os
from typing import Optional

import boto3

from cryptidcast.errors import MissingCredentials

_logger = logging.getLogger(__name__)
_ssm_client = None
_parameter_cache: dict[str, str] = {}


def _client():
    global _ssm_client
    if _ssm_client is None:
        _ssm_client = boto3.client("ssm")
    return _ssm_client


def get_parameter(name: str) -> str:
    """Fetch and cache a decrypted SecureString parameter."""
    if not name:
        raise ValueError("Parameter name cannot be empty")
    if name not in _parameter_cache:
        response = _client().get_parameter(Name=name, WithDecryption=True)
        _parameter_cache[name] = response["Parameter"]["Value"]
    return _parameter_cache[name]


def resolve_api_key(env_name: str, parameter_name: Optional[str] = None) -> str:
    """Return the API key from ``env_name``, hydrating it from SSM when configured."""
    value = os.getenv(env_name)
    if value:
        return value
    if parameter_name:
        value = get_parameter(parameter_name)
        os.environ[env_name] = value
        _logger.info("Loaded %s from SSM parameter %s", env_name, parameter_name)
        return value
    raise MissingCredentials(f"Missing API key. Set {env_name} in your environment.")


class KeySelector(abc.ABC):
    """Host capability for checking and choosing the API key."""

    @abc.abstractmethod
    def has_selected_api_key(self) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def open_select_key(self) -> None:
        raise NotImplementedError


class EnvKeySelector(KeySelector):
    """Keeps the selected key in an environment variable, prompting on demand."""

    def __init__(self, env_name: str, prompt: str = "API key: ") -> None:
        self.env_name = env_name
        self.prompt = prompt

    def has_selected_api_key(self) -> bool:
        return bool(os.getenv(self.env_name))

    def open_select_key(self) -> None:
        value = getpass.getpass(self.prompt).strip()
        if value:
            os.environ[self.env_name] = value
            _logger.info("Stored API key in %s", self.env_name)
