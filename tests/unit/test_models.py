"""Unit tests for dynsink data models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from dynsink.models.events import Event, Priority
from dynsink.models.formats import OutputFormatSpec
from dynsink.models.sink import SinkConfig


class TestEvent:
    def test_frozen(self, make_event):
        e = make_event()
        with pytest.raises(ValidationError):
            e.body = b"changed"

    def test_defaults(self):
        e = Event()
        assert e.body == b""
        assert e.tags == {}
        assert e.priority is Priority.INFO
        assert e.timestamp.tzinfo is not None

    def test_json_round_trip_of_body(self):
        e = Event.model_validate_json('{"body": "hello", "tags": {"host": "h1"}}')
        assert e.body == b"hello"
        assert e.tags == {"host": "h1"}

    def test_body_text_replaces_invalid_utf8(self, make_event):
        assert make_event(body=b"ok\xff").body_text == "ok�"


class TestOutputFormatSpec:
    def test_coerce_string(self):
        assert OutputFormatSpec.coerce("json") == OutputFormatSpec(name="json")

    def test_coerce_mapping(self):
        spec = OutputFormatSpec.coerce({"name": "raw", "args": ["|"]})
        assert spec.args == ("|",)

    def test_coerce_rejects_other_types(self):
        with pytest.raises(TypeError):
            OutputFormatSpec.coerce(7)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            OutputFormatSpec(name="  ")

    def test_str(self):
        assert str(OutputFormatSpec(name="json")) == "json"
        assert str(OutputFormatSpec(name="raw", args=("|",))) == "raw('|')"


class TestSinkConfig:
    def test_absolute_template(self):
        assert SinkConfig(destination_template="/a", filename_template="b").absolute_template == "/a/b"
        assert SinkConfig(destination_template="/a/", filename_template="b").absolute_template == "/a/b"
        assert SinkConfig(destination_template="/a").absolute_template == "/a"
