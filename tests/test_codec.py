from __future__ import annotations

import pytest

from bpcache import (
    CacheDecodeError,
    CacheEncodeError,
    JsonValueCodec,
    PickleValueCodec,
    create_value_codec,
)


@pytest.mark.parametrize(
    "value",
    ["text", 12, 1.5, True, None, ["test", "foo", "bar"], {"a": {"b": [1, {"c": None}]}}],
)
def test_json_codec_is_symmetric(value):
    codec = JsonValueCodec()
    assert codec.decode(codec.encode(value)) == value


def test_json_codec_emits_compact_utf8():
    assert JsonValueCodec().encode({"k": "é"}) == '{"k":"é"}'.encode("utf-8")


def test_json_codec_accepts_str_payloads():
    assert JsonValueCodec().decode('["x"]') == ["x"]


def test_json_codec_rejects_unserializable_values():
    with pytest.raises(CacheEncodeError):
        JsonValueCodec().encode(object())


@pytest.mark.parametrize("payload", [b"{broken", b"\xff\xfe"])
def test_json_codec_decode_errors(payload):
    with pytest.raises(CacheDecodeError):
        JsonValueCodec().decode(payload)


def test_pickle_codec_round_trips_python_objects():
    codec = PickleValueCodec()
    value = (1, frozenset({"a"}), b"raw")
    assert codec.decode(codec.encode(value)) == value


def test_pickle_codec_decode_error():
    with pytest.raises(CacheDecodeError):
        PickleValueCodec().decode(b"not a pickle")


def test_pickle_codec_encode_error():
    with pytest.raises(CacheEncodeError):
        PickleValueCodec().encode(lambda: None)


def test_create_value_codec_resolution():
    assert isinstance(create_value_codec(), JsonValueCodec)
    assert isinstance(create_value_codec(" Pickle "), PickleValueCodec)
    custom = JsonValueCodec()
    assert create_value_codec(custom) is custom
    with pytest.raises(ValueError, match="Unknown value codec"):
        create_value_codec("yaml")


@pytest.mark.parametrize(
    "value",
    [
        ("x", 1),
        {1: "a"},
        {"outer": [{"ok": 1}, {2: "b"}]},
        ["list", ("nested", "tuple")],
        {"k": {True: "flag"}},
    ],
)
def test_json_codec_rejects_values_it_cannot_restore_exactly(value):
    with pytest.raises(CacheEncodeError):
        JsonValueCodec().encode(value)


def test_json_codec_rejects_cyclic_values():
    value: list = []
    value.append(value)
    with pytest.raises(CacheEncodeError):
        JsonValueCodec().encode(value)


def test_json_codec_error_names_offending_path():
    with pytest.raises(CacheEncodeError, match=r"value\['outer'\]\[1\]"):
        JsonValueCodec().encode({"outer": [{"ok": 1}, {2: "b"}]})
