import io

import pytest

from gptwire.forms import FormBuilder
from gptwire.image import (
    CREATE_IMAGE_MODEL_DALL_E_3,
    CREATE_IMAGE_QUALITY_HD,
    CREATE_IMAGE_RESPONSE_FORMAT_URL,
    CREATE_IMAGE_SIZE_1024X1024,
    CREATE_IMAGE_STYLE_VIVID,
    ImageEditRequest,
    ImageRequest,
    ImageResponse,
    ImageVariRequest,
    build_image_edit_form,
    build_image_variation_form,
    wrap_reader,
)


class _BuilderFailure(Exception):
    pass


class _RecordingBuilder:
    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.calls = []
        self.values = {}

    def _step(self, name):
        self.calls.append(name)
        if name == self.fail_on:
            raise _BuilderFailure(name)

    def create_form_file_reader(self, fieldname, reader, filename=""):
        self._step(fieldname)

    def write_field(self, fieldname, value):
        self.values[fieldname] = value
        self._step(fieldname)

    def close(self):
        self._step("close")

    def form_data_content_type(self):
        return "multipart/form-data; boundary=recorded"


@pytest.mark.parametrize(
    "fail_on", ["image", "mask", "prompt", "n", "size", "response_format", "close"]
)
def test_edit_form_builder_failures(fail_on):
    builder = _RecordingBuilder(fail_on)
    req = ImageEditRequest(image=io.BytesIO(), mask=io.BytesIO())
    with pytest.raises(_BuilderFailure):
        build_image_edit_form(req, builder)
    assert builder.calls[-1] == fail_on


@pytest.mark.parametrize("fail_on", ["image", "n", "size", "response_format", "close"])
def test_variation_form_builder_failures(fail_on):
    builder = _RecordingBuilder(fail_on)
    with pytest.raises(_BuilderFailure):
        build_image_variation_form(ImageVariRequest(image=io.BytesIO()), builder)
    assert builder.calls[-1] == fail_on


def test_edit_form_order_and_values():
    builder = _RecordingBuilder()
    req = ImageEditRequest(
        image=io.BytesIO(),
        mask=io.BytesIO(),
        prompt="There is a turtle in the pool",
        n=3,
        size=CREATE_IMAGE_SIZE_1024X1024,
        response_format=CREATE_IMAGE_RESPONSE_FORMAT_URL,
    )
    content_type = build_image_edit_form(req, builder)
    assert content_type == "multipart/form-data; boundary=recorded"
    assert builder.calls == ["image", "mask", "prompt", "n", "size", "response_format", "close"]
    assert builder.values["n"] == "3"
    assert builder.values["size"] == "1024x1024"


def test_edit_form_without_mask():
    builder = _RecordingBuilder()
    build_image_edit_form(ImageEditRequest(image=io.BytesIO(), n=3), builder)
    assert "mask" not in builder.calls


def test_variation_form_order():
    builder = _RecordingBuilder()
    build_image_variation_form(ImageVariRequest(image=io.BytesIO(), n=3), builder)
    assert builder.calls == ["image", "n", "size", "response_format", "close"]


def test_edit_form_with_real_builder():
    body = io.BytesIO()
    builder = FormBuilder(body)
    req = ImageEditRequest(
        image=wrap_reader(io.BytesIO(b"pngdata"), "file.png", "image/png"),
        prompt="Lorem ipsum",
        n=1,
    )
    content_type = build_image_edit_form(req, builder)
    data = body.getvalue()
    assert content_type == f"multipart/form-data; boundary={builder.boundary}"
    assert b'name="image"; filename="file.png"' in data
    assert b"Content-Type: image/png" in data
    assert b"pngdata" in data
    assert data.endswith(f"--{builder.boundary}--\r\n".encode())


class _NamedSource:
    def __init__(self, data):
        self._inner = io.BytesIO(data)

    def read(self, size=-1):
        return self._inner.read(size)

    def name(self):
        return "named.txt"


def test_wrap_reader():
    wrapped = wrap_reader(io.BytesIO(b"data"), "file.png", "image/png")
    assert wrapped.name() == "file.png"
    assert wrapped.content_type() == "image/png"
    assert wrapped.read() == b"data"

    wrapped = wrap_reader(_NamedSource(b"d"), "", "text/plain")
    assert wrapped.name() == "named.txt"
    assert wrapped.content_type() == "text/plain"

    wrapped = wrap_reader(io.BytesIO(), "", "")
    assert wrapped.name() == ""


def test_image_request_to_dict():
    req = ImageRequest(
        prompt="Lorem ipsum",
        model=CREATE_IMAGE_MODEL_DALL_E_3,
        n=1,
        quality=CREATE_IMAGE_QUALITY_HD,
        size=CREATE_IMAGE_SIZE_1024X1024,
        style=CREATE_IMAGE_STYLE_VIVID,
        response_format=CREATE_IMAGE_RESPONSE_FORMAT_URL,
        user="user",
    )
    assert req.to_dict() == {
        "prompt": "Lorem ipsum",
        "model": "dall-e-3",
        "n": 1,
        "quality": "hd",
        "size": "1024x1024",
        "style": "vivid",
        "response_format": "url",
        "user": "user",
    }
    assert ImageRequest().to_dict() == {}


def test_image_response_from_dict():
    resp = ImageResponse.from_dict(
        {
            "created": 1692661014,
            "data": [{"url": "test-url1"}, {"url": "test-url2"}, {"b64_json": "e30K"}],
            "usage": {"total_tokens": 30, "input_tokens_details": {"image_tokens": 5}},
        }
    )
    assert resp.created == 1692661014
    assert [d.url for d in resp.data] == ["test-url1", "test-url2", ""]
    assert resp.data[2].b64_json == "e30K"
    assert resp.usage.total_tokens == 30
    assert resp.usage.input_tokens_details.image_tokens == 5
    assert ImageResponse.from_dict({}) == ImageResponse()