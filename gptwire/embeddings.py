"""Embedding requests, responses and vector helpers."""

from __future__ import annotations

import base64
import struct
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .common import Usage, _as_mapping, _check, _get
from .marshal import marshal, unmarshal

EMBEDDINGS_SUFFIX = "/embeddings"
_FLOAT32 = struct.Struct("<f")


class VectorLengthMismatchError(ValueError):
    """Two embedding vectors of different lengths were combined."""

    def __init__(self) -> None:
        super().__init__("vector length mismatch")


class EmbeddingModel(str, Enum):
    """Models that produce embedding vectors."""

    # The similarity and search models are shut down; use text-embedding-ada-002.
    ADA_SIMILARITY = "text-similarity-ada-001"
    BABBAGE_SIMILARITY = "text-similarity-babbage-001"
    CURIE_SIMILARITY = "text-similarity-curie-001"
    DAVINCI_SIMILARITY = "text-similarity-davinci-001"
    ADA_SEARCH_DOCUMENT = "text-search-ada-doc-001"
    ADA_SEARCH_QUERY = "text-search-ada-query-001"
    BABBAGE_SEARCH_DOCUMENT = "text-search-babbage-doc-001"
    BABBAGE_SEARCH_QUERY = "text-search-babbage-query-001"
    CURIE_SEARCH_DOCUMENT = "text-search-curie-doc-001"
    CURIE_SEARCH_QUERY = "text-search-curie-query-001"
    DAVINCI_SEARCH_DOCUMENT = "text-search-davinci-doc-001"
    DAVINCI_SEARCH_QUERY = "text-search-davinci-query-001"
    ADA_CODE_SEARCH_CODE = "code-search-ada-code-001"
    ADA_CODE_SEARCH_TEXT = "code-search-ada-text-001"
    BABBAGE_CODE_SEARCH_CODE = "code-search-babbage-code-001"
    BABBAGE_CODE_SEARCH_TEXT = "code-search-babbage-text-001"

    ADA_EMBEDDING_V2 = "text-embedding-ada-002"
    SMALL_EMBEDDING_3 = "text-embedding-3-small"
    LARGE_EMBEDDING_3 = "text-embedding-3-large"


class EmbeddingEncodingFormat(str, Enum):
    """How the embedding vectors are encoded in the response."""

    FLOAT = "float"
    BASE64 = "base64"


def _text(value: Any) -> str:
    if isinstance(value, Enum):
        return value.value
    return "" if value is None else value


def decode_base64_embedding(data: str) -> List[float]:
    """Decode base64 text holding little-endian float32 values.

    Trailing bytes that do not fill a whole float are ignored.
    """
    raw = base64.b64decode(data, validate=True)
    usable = len(raw) - len(raw) % _FLOAT32.size
    return [value for (value,) in _FLOAT32.iter_unpack(raw[:usable])]


def _float_list(doc: Mapping, key: str) -> List[float]:
    return [
        0.0 if item is None else _check(item, float, key)
        for item in _get(doc, key, list, [])
    ]


@dataclass
class Embedding:
    """One embedding vector and its position in the request input."""

    object: str = ""
    embedding: List[float] = field(default_factory=list)
    index: int = 0

    def dot_product(self, other: "Embedding") -> float:
        """Return the dot product with another vector of the same length."""
        if len(self.embedding) != len(other.embedding):
            raise VectorLengthMismatchError()
        return sum(a * b for a, b in zip(self.embedding, other.embedding))

    @classmethod
    def from_dict(cls, data: Any) -> "Embedding":
        doc = _as_mapping(data, "embedding")
        return cls(
            object=_get(doc, "object", str, ""),
            embedding=_float_list(doc, "embedding"),
            index=_get(doc, "index", int, 0),
        )


@dataclass
class Base64Embedding:
    """An embedding whose vector is still base64 encoded."""

    object: str = ""
    embedding: str = ""
    index: int = 0

    def decode(self) -> List[float]:
        return decode_base64_embedding(self.embedding)

    @classmethod
    def from_dict(cls, data: Any) -> "Base64Embedding":
        doc = _as_mapping(data, "embedding")
        return cls(
            object=_get(doc, "object", str, ""),
            embedding=_get(doc, "embedding", str, ""),
            index=_get(doc, "index", int, 0),
        )


@dataclass
class EmbeddingResponse:
    """The answer of the embeddings endpoint."""

    object: str = ""
    data: List[Embedding] = field(default_factory=list)
    model: str = ""
    usage: Usage = field(default_factory=Usage)

    @classmethod
    def from_dict(cls, data: Any) -> "EmbeddingResponse":
        doc = _as_mapping(data, "embedding response")
        return cls(
            object=_get(doc, "object", str, ""),
            data=[Embedding.from_dict(item) for item in _get(doc, "data", list, [])],
            model=_get(doc, "model", str, ""),
            usage=Usage.from_dict(doc.get("usage")),
        )


@dataclass
class EmbeddingResponseBase64:
    """The answer of the embeddings endpoint in base64 encoding."""

    object: str = ""
    data: List[Base64Embedding] = field(default_factory=list)
    model: str = ""
    usage: Usage = field(default_factory=Usage)

    @classmethod
    def from_dict(cls, data: Any) -> "EmbeddingResponseBase64":
        doc = _as_mapping(data, "embedding response")
        return cls(
            object=_get(doc, "object", str, ""),
            data=[
                Base64Embedding.from_dict(item) for item in _get(doc, "data", list, [])
            ],
            model=_get(doc, "model", str, ""),
            usage=Usage.from_dict(doc.get("usage")),
        )

    def to_embedding_response(self) -> EmbeddingResponse:
        """Decode every vector and return the float form of the response."""
        return EmbeddingResponse(
            object=self.object,
            data=[
                Embedding(object=item.object, embedding=item.decode(), index=item.index)
                for item in self.data
            ],
            model=self.model,
            usage=self.usage,
        )


@dataclass
class EmbeddingRequest:
    """A request to create embeddings for ``input``.

    ``extra_body`` holds members to add to the request body as they are.
    """

    input: Any = None
    model: Union[EmbeddingModel, str] = ""
    user: str = ""
    encoding_format: Union[EmbeddingEncodingFormat, str] = ""
    dimensions: int = 0
    extra_body: Dict[str, Any] = field(default_factory=dict)

    def convert(self) -> "EmbeddingRequest":
        return self

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"input": self.input, "model": _text(self.model)}
        if self.user:
            body["user"] = self.user
        if _text(self.encoding_format):
            body["encoding_format"] = _text(self.encoding_format)
        if self.dimensions:
            body["dimensions"] = self.dimensions
        if self.extra_body:
            body["extra_body"] = dict(self.extra_body)
        return body


@dataclass
class EmbeddingRequestStrings:
    """An embeddings request over a list of strings."""

    input: List[str] = field(default_factory=list)
    model: Union[EmbeddingModel, str] = ""
    user: str = ""
    encoding_format: Union[EmbeddingEncodingFormat, str] = ""
    dimensions: int = 0
    extra_body: Dict[str, Any] = field(default_factory=dict)

    def convert(self) -> EmbeddingRequest:
        return EmbeddingRequest(
            input=list(self.input),
            model=self.model,
            user=self.user,
            encoding_format=self.encoding_format,
            dimensions=self.dimensions,
            extra_body=dict(self.extra_body),
        )


@dataclass
class EmbeddingRequestTokens:
    """An embeddings request over lists of token ids."""

    input: List[List[int]] = field(default_factory=list)
    model: Union[EmbeddingModel, str] = ""
    user: str = ""
    encoding_format: Union[EmbeddingEncodingFormat, str] = ""
    dimensions: int = 0
    extra_body: Dict[str, Any] = field(default_factory=dict)

    def convert(self) -> EmbeddingRequest:
        return EmbeddingRequest(
            input=[list(tokens) for tokens in self.input],
            model=self.model,
            user=self.user,
            encoding_format=self.encoding_format,
            dimensions=self.dimensions,
            extra_body=dict(self.extra_body),
        )


def build_embedding_body(request: Any) -> Dict[str, Any]:
    """Return the JSON body to send for any kind of embeddings request.

    The request's ``extra_body`` members are merged into the top level.
    Raises ``MarshalError`` if the input cannot be encoded.
    """
    base = request.convert()
    body = base.to_dict()
    extra: Optional[Dict[str, Any]] = body.pop("extra_body", None)
    body = unmarshal(marshal(body))
    if extra:
        body.update(unmarshal(marshal(extra)))
    return body