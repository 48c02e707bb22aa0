"""
Client for image generation, edits and variations.

Generations are JSON requests; edits and variations upload images as
multipart form data.
"""

import logging
import mimetypes
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple, Union

from openai_tools.common.client import BaseClient
from openai_tools.common.errors import ConfigError
from openai_tools.config.constants import LOGGER_NAME
from openai_tools.images.response import ImageResponse

logger = logging.getLogger(LOGGER_NAME)

GENERATIONS_PATH = "images/generations"
EDITS_PATH = "images/edits"
VARIATIONS_PATH = "images/variations"

ImageModel = Literal["dall-e-2", "dall-e-3", "gpt-image-1"]
ImageSize = Literal["256x256", "512x512", "1024x1024", "1536x1024", "1024x1536", "1792x1024", "1024x1792", "auto"]
ImageQuality = Literal["standard", "hd", "low", "medium", "high", "auto"]
ImageStyle = Literal["vivid", "natural"]
ResponseFormat = Literal["url", "b64_json"]

ImageInput = Union[str, Path, Tuple[str, bytes]]


def _image_part(image: ImageInput) -> Tuple[str, bytes, str]:
    """A path, or a (filename, bytes) pair, as a multipart file tuple."""
    if isinstance(image, tuple):
        filename, content = image
    else:
        path = Path(image)
        filename, content = path.name, path.read_bytes()
    content_type = mimetypes.guess_type(filename)[0] or "image/png"
    return filename, content, content_type


def _options(**values: Any) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


class Images(BaseClient):
    def generate(
        self,
        prompt: str,
        model: ImageModel = "dall-e-3",
        n: Optional[int] = None,
        size: Optional[ImageSize] = None,
        quality: Optional[ImageQuality] = None,
        style: Optional[ImageStyle] = None,
        response_format: Optional[ResponseFormat] = None,
        background: Optional[str] = None,
        output_format: Optional[str] = None,
        user: Optional[str] = None,
    ) -> ImageResponse:
        if not prompt:
            raise ConfigError("A prompt is required")
        if model == "dall-e-3" and n is not None and n != 1:
            raise ConfigError("dall-e-3 only supports n=1")
        if style is not None and model != "dall-e-3":
            raise ConfigError("style is only supported by dall-e-3")
        body = _options(
            prompt=prompt,
            model=model,
            n=n,
            size=size,
            quality=quality,
            style=style,
            response_format=response_format,
            background=background,
            output_format=output_format,
            user=user,
        )
        logger.info(f"Generating image with {model}")
        return self.http.post(GENERATIONS_PATH, ImageResponse, body)

    def edit(
        self,
        image: ImageInput,
        prompt: str,
        mask: Optional[ImageInput] = None,
        model: ImageModel = "dall-e-2",
        n: Optional[int] = None,
        size: Optional[ImageSize] = None,
        response_format: Optional[ResponseFormat] = None,
        user: Optional[str] = None,
    ) -> ImageResponse:
        if not prompt:
            raise ConfigError("A prompt is required")
        files = {"image": _image_part(image)}
        if mask is not None:
            files["mask"] = _image_part(mask)
        data = _options(prompt=prompt, model=model, n=n, size=size, response_format=response_format, user=user)
        return self.http.post_form(EDITS_PATH, ImageResponse, _stringify(data), files)

    def variation(
        self,
        image: ImageInput,
        model: ImageModel = "dall-e-2",
        n: Optional[int] = None,
        size: Optional[ImageSize] = None,
        response_format: Optional[ResponseFormat] = None,
        user: Optional[str] = None,
    ) -> ImageResponse:
        data = _options(model=model, n=n, size=size, response_format=response_format, user=user)
        return self.http.post_form(VARIATIONS_PATH, ImageResponse, _stringify(data), {"image": _image_part(image)})


def _stringify(data: Dict[str, Any]) -> Dict[str, str]:
    return {key: str(value) for key, value in data.items()}
