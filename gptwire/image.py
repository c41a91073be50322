"""Image generation, edit and variation requests and responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .common import _as_mapping, _get

IMAGES_GENERATIONS_SUFFIX = "/images/generations"
IMAGES_EDITS_SUFFIX = "/images/edits"
IMAGES_VARIATIONS_SUFFIX = "/images/variations"

CREATE_IMAGE_SIZE_256X256 = "256x256"
CREATE_IMAGE_SIZE_512X512 = "512x512"
CREATE_IMAGE_SIZE_1024X1024 = "1024x1024"
# dall-e-3 only.
CREATE_IMAGE_SIZE_1792X1024 = "1792x1024"
CREATE_IMAGE_SIZE_1024X1792 = "1024x1792"
# gpt-image-1 only.
CREATE_IMAGE_SIZE_1536X1024 = "1536x1024"
CREATE_IMAGE_SIZE_1024X1536 = "1024x1536"

# dall-e-2 and dall-e-3 only.
CREATE_IMAGE_RESPONSE_FORMAT_B64_JSON = "b64_json"
CREATE_IMAGE_RESPONSE_FORMAT_URL = "url"

CREATE_IMAGE_MODEL_DALL_E_2 = "dall-e-2"
CREATE_IMAGE_MODEL_DALL_E_3 = "dall-e-3"
CREATE_IMAGE_MODEL_GPT_IMAGE_1 = "gpt-image-1"

CREATE_IMAGE_QUALITY_HD = "hd"
CREATE_IMAGE_QUALITY_STANDARD = "standard"
# gpt-image-1 only.
CREATE_IMAGE_QUALITY_HIGH = "high"
CREATE_IMAGE_QUALITY_MEDIUM = "medium"
CREATE_IMAGE_QUALITY_LOW = "low"

# dall-e-3 only.
CREATE_IMAGE_STYLE_VIVID = "vivid"
CREATE_IMAGE_STYLE_NATURAL = "natural"

# gpt-image-1 only.
CREATE_IMAGE_BACKGROUND_TRANSPARENT = "transparent"
CREATE_IMAGE_BACKGROUND_OPAQUE = "opaque"
CREATE_IMAGE_MODERATION_LOW = "low"
CREATE_IMAGE_OUTPUT_FORMAT_PNG = "png"
CREATE_IMAGE_OUTPUT_FORMAT_JPEG = "jpeg"
CREATE_IMAGE_OUTPUT_FORMAT_WEBP = "webp"


class NamedReader:
    """A readable object that also reports a file name and content type."""

    def __init__(self, reader: Any, filename: str = "", content_type: str = "") -> None:
        self._reader = reader
        self._name = filename
        self._content_type = content_type

    def read(self, size: int = -1) -> Any:
        return self._reader.read(size)

    def name(self) -> str:
        """The given file name, else the wrapped reader's own name, else ``""``."""
        if self._name:
            return self._name
        value = getattr(self._reader, "name", None)
        if callable(value):
            value = value()
        return value if isinstance(value, str) else ""

    def content_type(self) -> str:
        return self._content_type


def wrap_reader(reader: Any, filename: str = "", content_type: str = "") -> NamedReader:
    """Attach a file name and content type to ``reader`` for form uploads."""
    return NamedReader(reader, filename, content_type)


@dataclass
class ImageRequest:
    """A request to generate images from a prompt."""

    prompt: str = ""
    model: str = ""
    n: int = 0
    quality: str = ""
    size: str = ""
    style: str = ""
    response_format: str = ""
    user: str = ""
    background: str = ""
    moderation: str = ""
    output_compression: int = 0
    output_format: str = ""

    def to_dict(self) -> Dict[str, Any]:
        entries = [
            ("prompt", self.prompt),
            ("model", self.model),
            ("n", self.n),
            ("quality", self.quality),
            ("size", self.size),
            ("style", self.style),
            ("response_format", self.response_format),
            ("user", self.user),
            ("background", self.background),
            ("moderation", self.moderation),
            ("output_compression", self.output_compression),
            ("output_format", self.output_format),
        ]
        return {key: value for key, value in entries if value}


@dataclass
class ImageResponseDataInner:
    """One generated image, as a URL or base64 JSON."""

    url: str = ""
    b64_json: str = ""
    revised_prompt: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "ImageResponseDataInner":
        doc = _as_mapping(data, "image data")
        return cls(
            url=_get(doc, "url", str, ""),
            b64_json=_get(doc, "b64_json", str, ""),
            revised_prompt=_get(doc, "revised_prompt", str, ""),
        )


@dataclass
class ImageResponseInputTokensDetails:
    """Breakdown of the input tokens of an image request."""

    text_tokens: int = 0
    image_tokens: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "ImageResponseInputTokensDetails":
        doc = _as_mapping(data, "input tokens details")
        return cls(
            text_tokens=_get(doc, "text_tokens", int, 0),
            image_tokens=_get(doc, "image_tokens", int, 0),
        )


@dataclass
class ImageResponseUsage:
    """Token usage of an image request."""

    total_tokens: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    input_tokens_details: ImageResponseInputTokensDetails = field(
        default_factory=ImageResponseInputTokensDetails
    )

    @classmethod
    def from_dict(cls, data: Any) -> "ImageResponseUsage":
        doc = _as_mapping(data, "image usage")
        return cls(
            total_tokens=_get(doc, "total_tokens", int, 0),
            input_tokens=_get(doc, "input_tokens", int, 0),
            output_tokens=_get(doc, "output_tokens", int, 0),
            input_tokens_details=ImageResponseInputTokensDetails.from_dict(
                doc.get("input_tokens_details")
            ),
        )


@dataclass
class ImageResponse:
    """The answer of the image endpoints."""

    created: int = 0
    data: List[ImageResponseDataInner] = field(default_factory=list)
    usage: ImageResponseUsage = field(default_factory=ImageResponseUsage)

    @classmethod
    def from_dict(cls, data: Any) -> "ImageResponse":
        doc = _as_mapping(data, "image response")
        return cls(
            created=_get(doc, "created", int, 0),
            data=[
                ImageResponseDataInner.from_dict(item)
                for item in _get(doc, "data", list, [])
            ],
            usage=ImageResponseUsage.from_dict(doc.get("usage")),
        )


@dataclass
class ImageEditRequest:
    """A request to edit an image; wrap readers with :func:`wrap_reader`."""

    image: Any = None
    mask: Optional[Any] = None
    prompt: str = ""
    model: str = ""
    n: int = 0
    size: str = ""
    response_format: str = ""
    quality: str = ""
    user: str = ""


@dataclass
class ImageVariRequest:
    """A request for variations of an image."""

    image: Any = None
    model: str = ""
    n: int = 0
    size: str = ""
    response_format: str = ""
    user: str = ""


def build_image_edit_form(request: ImageEditRequest, builder: Any) -> str:
    """Write the multipart body of an edit request; return its content type."""
    builder.create_form_file_reader("image", request.image, "")
    if request.mask is not None:
        builder.create_form_file_reader("mask", request.mask, "")
    builder.write_field("prompt", request.prompt)
    builder.write_field("n", str(request.n))
    builder.write_field("size", request.size)
    builder.write_field("response_format", request.response_format)
    builder.close()
    return builder.form_data_content_type()


def build_image_variation_form(request: ImageVariRequest, builder: Any) -> str:
    """Write the multipart body of a variation request; return its content type."""
    builder.create_form_file_reader("image", request.image, "")
    builder.write_field("n", str(request.n))
    builder.write_field("size", request.size)
    builder.write_field("response_format", request.response_format)
    builder.close()
    return builder.form_data_content_type()