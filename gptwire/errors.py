"""Errors reported by the API and by failed requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .common import _as_mapping, _get
from .marshal import MarshalError, unmarshal


@dataclass
class InnerError:
    """Azure content-filtering details attached to an API error."""

    code: str = ""
    content_filter_results: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "InnerError":
        doc = _as_mapping(data, "inner error")
        return cls(
            code=_get(doc, "code", str, ""),
            content_filter_results=dict(_get(doc, "content_filter_result", dict, {})),
        )


def _decode_message(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        parts = []
        for item in value:
            if item is None:
                parts.append("")
            elif isinstance(item, str):
                parts.append(item)
            else:
                raise MarshalError("error message list must hold strings")
        return ", ".join(parts)
    raise MarshalError(
        f"cannot decode error message from {type(value).__name__}"
    )


def _decode_code(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return int(value)
    return value


class APIError(Exception):
    """An error returned by the API.

    ``inner_error`` is only filled in by Azure OpenAI Service.
    """

    def __init__(
        self,
        message: str = "",
        *,
        code: Any = None,
        param: Optional[str] = None,
        type: str = "",
        http_status: str = "",
        http_status_code: int = 0,
        inner_error: Optional[InnerError] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.param = param
        self.type = type
        self.http_status = http_status
        self.http_status_code = http_status_code
        self.inner_error = inner_error

    @classmethod
    def from_json(cls, data: Union[bytes, str]) -> "APIError":
        """Decode an error object from JSON text."""
        return cls._from_document(unmarshal(data))

    @classmethod
    def _from_document(cls, document: Any) -> "APIError":
        doc = _as_mapping(document, "API error")
        if "message" not in doc:
            raise MarshalError("API error has no message")
        message = _decode_message(doc["message"])
        error_type = _get(doc, "type", str, "")
        inner_value = doc.get("innererror")
        inner = None if inner_value is None else InnerError.from_dict(inner_value)
        param = _get(doc, "param", str, None)
        code = _decode_code(doc.get("code"))
        return cls(
            message,
            code=code,
            param=param,
            type=error_type,
            inner_error=inner,
        )

    def __str__(self) -> str:
        if self.http_status_code > 0:
            return (
                f"error, status code: {self.http_status_code}, "
                f"status: {self.http_status}, message: {self.message}"
            )
        return self.message


class RequestError(Exception):
    """A request failed without a usable API error in the response."""

    def __init__(
        self,
        http_status: str = "",
        http_status_code: int = 0,
        err: Optional[BaseException] = None,
        body: bytes = b"",
    ) -> None:
        super().__init__(http_status, http_status_code, err, body)
        self.http_status = http_status
        self.http_status_code = http_status_code
        self.err = err
        self.body = body
        if isinstance(err, BaseException):
            self.__cause__ = err

    def __str__(self) -> str:
        body = self.body
        if isinstance(body, (bytes, bytearray)):
            body = bytes(body).decode("utf-8", "replace")
        elif body is None:
            body = ""
        err = "" if self.err is None else str(self.err)
        return (
            f"error, status code: {self.http_status_code}, "
            f"status: {self.http_status}, message: {err}, body: {body}"
        )


def parse_error_response(data: Union[bytes, str]) -> Optional[APIError]:
    """Decode a response body of the form ``{"error": {...}}``.

    Returns ``None`` when the body carries no error object.
    """
    document = unmarshal(data)
    if document is None:
        return None
    doc = _as_mapping(document, "error response")
    value = doc.get("error")
    if value is None:
        return None
    return APIError._from_document(value)