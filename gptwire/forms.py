"""Build multipart/form-data request bodies."""

from __future__ import annotations

import os
import secrets
import string
from typing import Any, BinaryIO, Iterable, Optional, Tuple

_CHUNK_SIZE = 32 * 1024
_BOUNDARY_CHARS = frozenset(string.ascii_letters + string.digits + "'()+_,-./:=? ")
_QUOTE_TRIGGERS = frozenset('()<>@,;:\\"/[]?= ')


def _escape_quotes(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _base_name(path: str) -> str:
    """Return the last element of ``path``, as a file-path base name."""
    if not path:
        return "."
    separators = os.sep + (os.altsep or "")
    stripped = path.rstrip(separators)
    if not stripped:
        return os.sep
    return os.path.basename(stripped)


def _reader_attribute(reader: Any, attribute: str) -> str:
    value = getattr(reader, attribute, None)
    if callable(value):
        value = value()
    return value if isinstance(value, str) else ""


def _validate_boundary(boundary: str) -> None:
    if not 1 <= len(boundary) <= 70:
        raise ValueError("invalid boundary length")
    if boundary.endswith(" "):
        raise ValueError("boundary must not end with a space")
    bad = [c for c in boundary if c not in _BOUNDARY_CHARS]
    if bad:
        raise ValueError(f"invalid boundary character {bad[0]!r}")


class FormBuilder:
    """Write form fields and files as multipart parts onto a binary stream."""

    def __init__(self, stream: BinaryIO, boundary: Optional[str] = None) -> None:
        if boundary is None:
            boundary = secrets.token_hex(30)
        else:
            _validate_boundary(boundary)
        self._stream = stream
        self._boundary = boundary
        self._has_parts = False

    @property
    def boundary(self) -> str:
        return self._boundary

    def _create_part(self, headers: Iterable[Tuple[str, str]]) -> None:
        if self._has_parts:
            text = f"\r\n--{self._boundary}\r\n"
        else:
            text = f"--{self._boundary}\r\n"
        text += "".join(f"{key}: {value}\r\n" for key, value in sorted(headers))
        text += "\r\n"
        self._stream.write(text.encode("utf-8"))
        self._has_parts = True

    def _copy(self, reader: Any) -> None:
        while True:
            chunk = reader.read(_CHUNK_SIZE)
            if not chunk:
                break
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            self._stream.write(chunk)

    def _create_form_file(self, fieldname: str, reader: Any, filename: str) -> None:
        if not filename:
            raise ValueError("filename cannot be empty")
        disposition = (
            f'form-data; name="{_escape_quotes(fieldname)}"; '
            f'filename="{_escape_quotes(filename)}"'
        )
        self._create_part(
            [
                ("Content-Disposition", disposition),
                ("Content-Type", "application/octet-stream"),
            ]
        )
        self._copy(reader)

    def create_form_file(self, fieldname: str, file: Any) -> None:
        """Add an open file as a part, named after the file's own name."""
        self._create_form_file(fieldname, file, _reader_attribute(file, "name"))

    def create_form_file_reader(
        self, fieldname: str, reader: Any, filename: str = ""
    ) -> None:
        """Add the contents of ``reader`` as a file part.

        Without ``filename`` the reader's own name is used, if it has one.
        A ``content_type`` the reader reports is sent with the part.
        """
        if not filename:
            filename = _reader_attribute(reader, "name")
        content_type = _reader_attribute(reader, "content_type")

        headers = [
            (
                "Content-Disposition",
                f'form-data; name="{_escape_quotes(fieldname)}"; '
                f'filename="{_escape_quotes(_base_name(filename))}"',
            )
        ]
        if content_type:
            headers.append(("Content-Type", content_type))
        self._create_part(headers)
        self._copy(reader)

    def write_field(self, fieldname: str, value: str) -> None:
        """Add a plain form field."""
        if not fieldname:
            raise ValueError("fieldname cannot be empty")
        self._create_part(
            [("Content-Disposition", f'form-data; name="{_escape_quotes(fieldname)}"')]
        )
        self._stream.write(value.encode("utf-8"))

    def close(self) -> None:
        """Write the closing boundary."""
        self._stream.write(f"\r\n--{self._boundary}--\r\n".encode("utf-8"))

    def form_data_content_type(self) -> str:
        """Return the Content-Type header value for the body."""
        boundary = self._boundary
        if any(c in _QUOTE_TRIGGERS for c in boundary):
            boundary = f'"{boundary}"'
        return f"multipart/form-data; boundary={boundary}"