"""Photo encoding: uploaded temporary file -> storable binary payload."""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict

from modules.products.dtos import PhotoUpload

logger = structlog.get_logger(__name__)


class PhotoPayload(BaseModel):
    """Photo bytes tagged with their content type, as stored on a product."""

    model_config = ConfigDict(frozen=True)

    content_type: str
    data: bytes


def encode_photo(upload: PhotoUpload) -> PhotoPayload:
    """Read the uploaded file fully into memory.

    Raises:
        OSError: if the temporary file cannot be read.
    """
    data = Path(upload.path).read_bytes()
    logger.debug(
        "product.photo_encoded",
        content_type=upload.content_type,
        declared_size=upload.size,
        size=len(data),
    )
    return PhotoPayload(content_type=upload.content_type, data=data)
