"""JSON encoding with extra-field merging, and JSON decoding helpers."""

from __future__ import annotations

import base64
import dataclasses
import json
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional, Union


class MarshalError(ValueError):
    """Raised when a value cannot be encoded or decoded as JSON."""


_HTML_ESCAPES = {
    ord("<"): "\\u003c",
    ord(">"): "\\u003e",
    ord("&"): "\\u0026",
    0x2028: "\\u2028",
    0x2029: "\\u2029",
}


def _default(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    raise TypeError(f"unsupported type: {type(obj).__name__}")


def _encode(value: Any) -> str:
    try:
        text = json.dumps(
            value,
            default=_default,
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise MarshalError(str(exc)) from exc
    return text.translate(_HTML_ESCAPES)


def _extra_fields(value: Any) -> Optional[Mapping]:
    if isinstance(value, Mapping):
        return None
    extra = getattr(value, "extra_fields", None)
    if callable(extra):
        extra = extra()
    return extra if isinstance(extra, Mapping) else None


def merge_patch(original: Any, patch: Any) -> Any:
    """Apply a JSON merge patch to ``original`` and return the result.

    Neither argument is modified.
    """
    if not isinstance(patch, Mapping):
        return patch
    result = dict(original) if isinstance(original, Mapping) else {}
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = merge_patch(result.get(key), value)
    return result


def marshal(value: Any) -> bytes:
    """Encode ``value`` as compact JSON.

    Objects with ``to_dict`` are encoded through it. If the value carries a
    non-empty ``extra_fields`` mapping, it is merged into the encoded object.
    """
    original = _encode(value)
    extra = _extra_fields(value)
    if not extra:
        return original.encode("utf-8")
    document = json.loads(original)
    if not isinstance(document, dict):
        raise MarshalError(
            f"cannot merge extra fields into non-object document {original}"
        )
    patch = json.loads(_encode(dict(extra)))
    return _encode(merge_patch(document, patch)).encode("utf-8")


def unmarshal(data: Union[bytes, str, None]) -> Any:
    """Decode JSON text into Python values."""
    if data is None:
        raise MarshalError("unexpected end of JSON input")
    try:
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("utf-8")
        return json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MarshalError(str(exc)) from exc


def _known_names(known_fields: Any) -> set:
    if isinstance(known_fields, type) and dataclasses.is_dataclass(known_fields):
        return {
            field.metadata.get("json", field.name)
            for field in dataclasses.fields(known_fields)
        }
    if dataclasses.is_dataclass(known_fields):
        return _known_names(type(known_fields))
    if isinstance(known_fields, (str, bytes)):
        raise TypeError("known fields must be a collection of names or a dataclass")
    return set(known_fields)


def unmarshal_extra_fields(
    known_fields: Union[Iterable[str], Any], data: Union[bytes, str]
) -> Dict[str, Any]:
    """Return the members of a JSON object that are not among ``known_fields``.

    ``known_fields`` is either a collection of JSON keys or a dataclass, whose
    fields count by their ``json`` metadata name or else by their own name.
    """
    names = _known_names(known_fields)
    document = unmarshal(data)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise MarshalError("JSON document is not an object")
    return {key: value for key, value in document.items() if key not in names}