"""Uploaded file records and the multipart bodies used to upload them."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Union

from .common import _as_mapping, _get

FILES_SUFFIX = "/files"


class PurposeType(str, Enum):
    """What an uploaded file is meant for."""

    FINE_TUNE = "fine-tune"
    FINE_TUNE_RESULTS = "fine-tune-results"
    ASSISTANTS = "assistants"
    ASSISTANTS_OUTPUT = "assistants_output"
    BATCH = "batch"


def _text(value: Any) -> str:
    return value.value if isinstance(value, Enum) else value


@dataclass
class FileRequest:
    """Upload a local file found at ``file_path``."""

    file_name: str = ""
    file_path: str = ""
    purpose: Union[PurposeType, str] = ""


@dataclass
class FileBytesRequest:
    """Upload bytes held in memory under the name ``name``."""

    name: str = ""
    content: bytes = b""
    purpose: Union[PurposeType, str] = ""


@dataclass
class File:
    """A file stored by the API."""

    bytes: int = 0
    created_at: int = 0
    id: str = ""
    filename: str = ""
    object: str = ""
    status: str = ""
    purpose: str = ""
    status_details: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "File":
        doc = _as_mapping(data, "file")
        return cls(
            bytes=_get(doc, "bytes", int, 0),
            created_at=_get(doc, "created_at", int, 0),
            id=_get(doc, "id", str, ""),
            filename=_get(doc, "filename", str, ""),
            object=_get(doc, "object", str, ""),
            status=_get(doc, "status", str, ""),
            purpose=_get(doc, "purpose", str, ""),
            status_details=_get(doc, "status_details", str, ""),
        )


@dataclass
class FilesList:
    """The files that belong to the user or organisation."""

    files: List[File] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "FilesList":
        doc = _as_mapping(data, "files list")
        return cls(files=[File.from_dict(item) for item in _get(doc, "data", list, [])])


def build_file_bytes_form(request: FileBytesRequest, builder: Any) -> str:
    """Write the upload form for in-memory bytes; return its content type."""
    builder.write_field("purpose", _text(request.purpose))
    builder.create_form_file_reader("file", io.BytesIO(request.content), request.name)
    builder.close()
    return builder.form_data_content_type()


def build_file_form(request: FileRequest, builder: Any) -> str:
    """Write the upload form for a local file; return its content type.

    Raises ``FileNotFoundError`` if ``request.file_path`` does not exist.
    """
    builder.write_field("purpose", _text(request.purpose))
    with open(request.file_path, "rb") as handle:
        builder.create_form_file("file", handle)
    builder.close()
    return builder.form_data_content_type()