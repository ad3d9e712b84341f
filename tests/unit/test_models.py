"""Unit tests for sockit.models."""

import pytest

from sockit.models import (
    DOES_NOT_CONFORM,
    MatchResult,
    PatternMode,
    Segment,
    SegmentKind,
    SockitConfig,
)


class TestSegment:
    def test_literal(self) -> None:
        s = Segment.literal("users/")
        assert s.kind is SegmentKind.LITERAL
        assert not s.is_parameter

    def test_parameter(self) -> None:
        s = Segment.parameter("username")
        assert s.kind is SegmentKind.PARAMETER
        assert s.is_parameter
        assert s.text == "username"

    def test_segment_is_frozen(self) -> None:
        s = Segment.literal("x")
        with pytest.raises(AttributeError):
            s.text = "y"  # type: ignore[misc]


class TestMatchResult:
    def test_conforming(self) -> None:
        result = MatchResult(values=("a", "b"))
        assert result.conforms
        assert bool(result)

    def test_conforming_without_values(self) -> None:
        result = MatchResult(values=())
        assert result.conforms
        assert bool(result)

    def test_does_not_conform(self) -> None:
        assert not DOES_NOT_CONFORM.conforms
        assert not DOES_NOT_CONFORM
        assert DOES_NOT_CONFORM.values is None


class TestPatternMode:
    def test_values(self) -> None:
        assert PatternMode.INBOUND.value == "inbound"
        assert PatternMode.OUTBOUND.value == "outbound"


class TestSockitConfig:
    def test_defaults(self) -> None:
        config = SockitConfig()
        assert config.argument_marker == ":"
        assert config.construction_prefix == "init"
        assert config.strict_delimiters is False
        assert config.cache_size == 128
        assert config.is_valid

    def test_empty_marker(self) -> None:
        errors = SockitConfig(argument_marker="").validate()
        assert any("argument_marker" in e for e in errors)

    def test_marker_with_parenthesis(self) -> None:
        assert not SockitConfig(argument_marker=")").is_valid

    def test_empty_prefix(self) -> None:
        assert not SockitConfig(construction_prefix="").is_valid

    def test_negative_cache_size(self) -> None:
        assert not SockitConfig(cache_size=-1).is_valid

    def test_unknown_log_level(self) -> None:
        errors = SockitConfig(log_level="LOUD").validate()
        assert errors == ["Unknown log_level: LOUD"]
