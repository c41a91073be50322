import dataclasses
import json

import pytest

from gptwire.marshal import (
    MarshalError,
    marshal,
    merge_patch,
    unmarshal,
    unmarshal_extra_fields,
)


class _WithExtra:
    def __init__(self, model, extra):
        self.model = model
        self.extra_fields = extra

    def to_dict(self):
        return {"model": self.model}


def test_marshal_map():
    assert marshal({"key": "value"}) == b'{"key":"value"}'


def test_marshal_invalid_input():
    with pytest.raises(MarshalError):
        marshal(object())


def test_marshal_none_is_null():
    assert marshal(None) == b"null"


def test_marshal_escapes_html_characters():
    assert marshal("<a&b>") == b'"\\u003ca\\u0026b\\u003e"'


def test_marshal_escapes_line_separators():
    assert marshal(chr(0x2028) + chr(0x2029)) == b'"\\u2028\\u2029"'


def test_marshal_bytes_as_base64():
    assert marshal(b"hi") == b'"aGk="'


def test_marshal_merges_extra_fields():
    out = json.loads(marshal(_WithExtra("test-model", {"extra_field": "extra_value"})))
    assert out == {"model": "test-model", "extra_field": "extra_value"}


def test_marshal_extra_field_none_removes_key():
    out = json.loads(marshal(_WithExtra("test-model", {"model": None})))
    assert out == {}


def test_marshal_without_extra_fields_keeps_original():
    assert marshal(_WithExtra("m", {})) == b'{"model":"m"}'


@pytest.mark.parametrize(
    "original, patch, expected",
    [
        ({"a": "b"}, {"a": "c"}, {"a": "c"}),
        ({"a": "b"}, {"b": "c"}, {"a": "b", "b": "c"}),
        ({"a": "b"}, {"a": None}, {}),
        ({"a": "b", "b": "c"}, {"a": None}, {"b": "c"}),
        ({"a": ["b"]}, {"a": "c"}, {"a": "c"}),
        ({"a": "c"}, {"a": ["b"]}, {"a": ["b"]}),
        ({"a": {"b": "c"}}, {"a": {"b": "d", "c": None}}, {"a": {"b": "d"}}),
        ({"a": [{"b": "c"}]}, {"a": [1]}, {"a": [1]}),
        (["a", "b"], ["c", "d"], ["c", "d"]),
        ({"a": "b"}, ["c"], ["c"]),
        ({"a": "foo"}, None, None),
        ({"a": "foo"}, "bar", "bar"),
        ({"e": None}, {"a": 1}, {"e": None, "a": 1}),
        ([1, 2], {"a": "b", "c": None}, {"a": "b"}),
        ({}, {"a": {"bb": {"ccc": None}}}, {"a": {"bb": {}}}),
    ],
)
def test_merge_patch_rfc_examples(original, patch, expected):
    assert merge_patch(original, patch) == expected


def test_merge_patch_does_not_mutate():
    original = {"a": {"b": 1}}
    merge_patch(original, {"a": {"b": 2}})
    assert original == {"a": {"b": 1}}


def test_unmarshal_normal():
    assert unmarshal(b'{"key":"value"}') == {"key": "value"}


def test_unmarshal_invalid_json():
    with pytest.raises(MarshalError):
        unmarshal(b"{invalid}")


def test_unmarshal_empty_input():
    with pytest.raises(MarshalError):
        unmarshal(None)
    with pytest.raises(MarshalError):
        unmarshal(b"")


_SAMPLE = b'{"field1":"value1","Field2":2,"field3":{"field4":"value4"},"extraField1":"extraValue1"}'


def test_unmarshal_extra_fields_with_names():
    extra = unmarshal_extra_fields(["field1", "Field2", "field3"], _SAMPLE)
    assert extra == {"extraField1": "extraValue1"}


@dataclasses.dataclass
class _Sample:
    field1: str = dataclasses.field(default="", metadata={"json": "field1"})
    Field2: int = 0
    field3: dict = dataclasses.field(default_factory=dict)


def test_unmarshal_extra_fields_with_dataclass():
    assert unmarshal_extra_fields(_Sample, _SAMPLE) == {"extraField1": "extraValue1"}
    assert unmarshal_extra_fields(_Sample(), _SAMPLE) == {"extraField1": "extraValue1"}


def test_unmarshal_extra_fields_null_document():
    assert unmarshal_extra_fields(["a"], b"null") == {}


def test_unmarshal_extra_fields_non_object():
    with pytest.raises(MarshalError):
        unmarshal_extra_fields(["a"], b"[1, 2]")