from __future__ import annotations

import base64
import logging
import mimetypes
from pathlib import Path
from typing import IO, Union

from pydantic import BaseModel, ConfigDict

from cryptidcast.errors import ReadError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"

ImageResource = Union[str, Path, bytes, IO[bytes]]


class EncodedImage(BaseModel):
    """Base64 image payload plus its media type."""

    model_config = ConfigDict(frozen=True)

    data: str
    mime_type: str

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)


def encode_image(resource: ImageResource, mime_type: str | None = None) -> EncodedImage:
    """Read an image resource and return it as transport-safe base64 text.

    ``resource`` may be a path, raw bytes, or a binary file object. The media
    type falls back to a guess from the file name when not given explicitly.
    """
    raw = _read_resource(resource)
    if not raw:
        raise ReadError(f"Image resource {_describe(resource)} is empty")
    resolved_type = mime_type or _guess_mime_type(resource)
    logger.debug("Encoded %d bytes from %s as %s", len(raw), _describe(resource), resolved_type)
    return EncodedImage(data=base64.b64encode(raw).decode("ascii"), mime_type=resolved_type)


def _read_resource(resource: ImageResource) -> bytes:
    if isinstance(resource, (bytes, bytearray)):
        return bytes(resource)
    try:
        if isinstance(resource, (str, Path)):
            return Path(resource).read_bytes()
        payload = resource.read()
    except OSError as exc:
        raise ReadError(f"Failed to read image {_describe(resource)}: {exc}") from exc
    if not isinstance(payload, (bytes, bytearray)):
        raise ReadError(f"Image resource {_describe(resource)} is not opened in binary mode")
    return bytes(payload)


def _guess_mime_type(resource: ImageResource) -> str:
    name = _resource_name(resource)
    if name:
        guessed, _ = mimetypes.guess_type(name)
        if guessed:
            return guessed
    return DEFAULT_MIME_TYPE


def _resource_name(resource: ImageResource) -> str | None:
    if isinstance(resource, (str, Path)):
        return str(resource)
    name = getattr(resource, "name", None)
    return name if isinstance(name, str) else None


def _describe(resource: ImageResource) -> str:
    return _resource_name(resource) or "<in-memory>"
