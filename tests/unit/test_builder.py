"""Unit tests for the positional sink builder."""

from __future__ import annotations

import pytest

from dynsink.config import SinkSettings
from dynsink.formats.registry import FormatRegistry
from dynsink.formats.text import RawOutputFormat
from dynsink.models.formats import OutputFormatSpec
from dynsink.models.sink import RouteMode
from dynsink.routing.builder import ConfigurationError, build_escaped_sink, parse_sink_args


class TestArgumentCount:
    def test_zero_arguments_rejected(self, settings, writer_factory):
        with pytest.raises(ConfigurationError, match="usage"):
            build_escaped_sink(settings=settings, writer_factory=writer_factory)
        assert writer_factory.created == []

    def test_four_arguments_rejected(self, settings, writer_factory):
        with pytest.raises(ConfigurationError, match="got 4"):
            build_escaped_sink(
                "/logs", "app.log", "raw", "extra",
                settings=settings, writer_factory=writer_factory,
            )
        assert writer_factory.created == []

    @pytest.mark.parametrize(
        "args",
        [("/logs/app.log",), ("/logs", "app.log"), ("/logs", "app.log", "raw")],
    )
    def test_one_to_three_arguments_accepted(self, args, settings, writer_factory):
        sink = build_escaped_sink(*args, settings=settings, writer_factory=writer_factory)
        assert sink.template == "/logs/app.log"
        assert sink.mode is RouteMode.STATIC

    def test_empty_destination_rejected(self):
        with pytest.raises(ConfigurationError):
            parse_sink_args("")


class TestFormatArgument:
    def test_legacy_string_normalized(self):
        cfg = parse_sink_args("/logs", "app.log", "syslog")
        assert cfg.format_spec == OutputFormatSpec(name="syslog")

    def test_mapping_normalized(self):
        cfg = parse_sink_args("/logs", "app.log", {"name": "raw", "args": ["|"]})
        assert cfg.format_spec == OutputFormatSpec(name="raw", args=("|",))

    def test_structured_spec_kept(self):
        spec = OutputFormatSpec(name="log4j")
        cfg = parse_sink_args("/logs", "", spec)
        assert cfg.format_spec is spec

    def test_omitted_format_leaves_default(self):
        cfg = parse_sink_args("/logs/%{host}")
        assert cfg.format_spec is None

    def test_broken_default_does_not_block_build(self, storage, make_event):
        broken = SinkSettings(_env_file=None, default_output_format="also-missing")
        sink = build_escaped_sink(
            "/logs/%{host}.log", settings=broken, writer_factory=storage.writer
        )
        sink.append(make_event(body="x", tags={"host": "h1"}))
        assert storage.records("/logs/h1.log") == [b"x\n"]

    def test_unknown_format_is_fatal(self, settings, writer_factory):
        with pytest.raises(ConfigurationError, match="Illegal format type"):
            build_escaped_sink(
                "/logs/%{host}", "app.log", "no-such-format",
                settings=settings, writer_factory=writer_factory,
            )
        assert writer_factory.created == []

    def test_bad_format_arguments_are_fatal(self):
        with pytest.raises(ConfigurationError):
            parse_sink_args("/logs", "x", {"name": "syslog", "args": [99]})

    def test_unsupported_format_type_is_fatal(self):
        with pytest.raises(ConfigurationError):
            parse_sink_args("/logs", "x", 3.14)

    def test_custom_registry_consulted(self):
        registry = FormatRegistry()
        registry.register("plain", RawOutputFormat)
        registry.register("json", RawOutputFormat)
        cfg = parse_sink_args("/logs", "x", "plain", registry=registry)
        assert cfg.format_spec.name == "plain"
        with pytest.raises(ConfigurationError):
            parse_sink_args("/logs", "x", "syslog", registry=registry)


class TestWiring:
    def test_wiring_passed_through(self, settings, storage, make_event):
        sink = build_escaped_sink(
            "/logs/%{host}", "app.log", "raw",
            settings=settings, writer_factory=storage.writer, max_open_writers=5,
        )
        sink.open()
        sink.append(make_event(body="x", tags={"host": "h1"}))
        sink.close()
        assert storage.records("/logs/h1/app.log") == [b"x\n"]
