"""Unit tests for sockit.matcher."""

from sockit.matcher import match_segments
from sockit.models import DOES_NOT_CONFORM
from sockit.parser import compile_pattern


def _extract(template: str, text: str) -> tuple[str, ...] | None:
    return match_segments(compile_pattern(template).segments, text).values


class TestLiterals:
    def test_exact_literal(self) -> None:
        assert _extract("github.com", "github.com") == ()

    def test_literal_mismatch(self) -> None:
        assert _extract("github.com", "gitlab.com") is None

    def test_trailing_characters_rejected(self) -> None:
        assert _extract("github.com", "github.com/") is None

    def test_literal_prefix_rejected(self) -> None:
        assert _extract("github.com", "github") is None

    def test_empty_pattern(self) -> None:
        assert _extract("", "") == ()
        assert _extract("", "x") is None

    def test_does_not_conform_singleton(self) -> None:
        result = match_segments(compile_pattern("a").segments, "b")
        assert result is DOES_NOT_CONFORM
        assert not result


class TestParameters:
    def test_single_parameter(self) -> None:
        assert _extract(
            "api.example.com/users/(username)/repos",
            "api.example.com/users/jverkoey/repos",
        ) == ("jverkoey",)

    def test_two_parameters(self) -> None:
        assert _extract(
            "repos/(owner)/(repo)/issues", "repos/jverkoey/sockit/issues"
        ) == ("jverkoey", "sockit")

    def test_leading_parameter(self) -> None:
        assert _extract("(user)@example.com", "bob@example.com") == ("bob",)

    def test_trailing_parameter_takes_rest(self) -> None:
        assert _extract("(a)-(b)", "1-2-3") == ("1", "2-3")

    def test_trailing_parameter_may_be_empty(self) -> None:
        assert _extract("users/(id)", "users/") == ("",)

    def test_inner_parameter_may_be_empty(self) -> None:
        assert _extract("users/(id)/repos", "users//repos") == ("",)

    def test_parameter_only(self) -> None:
        assert _extract("(all)", "everything/here") == ("everything/here",)

    def test_adjacent_parameters(self) -> None:
        assert _extract("(a)(b)", "xyz") == ("", "xyz")

    def test_missing_literal(self) -> None:
        assert _extract("a/(x)/b", "a/foo") is None

    def test_missing_leading_literal(self) -> None:
        assert _extract("users/(id)", "people/1") is None

    def test_literals_out_of_order(self) -> None:
        assert _extract("(a)-(b)+(c)", "1+2-3") is None

    def test_backtracks_to_later_occurrence(self) -> None:
        assert _extract("(a)/(b).json", "x/y.json.json") == ("x", "y.json")

    def test_lazy_capture_stops_at_first_viable_boundary(self) -> None:
        assert _extract("(a)/(b)/end", "x/y/z/end") == ("x", "y/z")

    def test_value_count_matches_parameters(self) -> None:
        values = _extract("(a).(b).(c)", "1.2.3")
        assert values == ("1", "2", "3")

    def test_many_repeated_delimiters(self) -> None:
        template = "/".join(f"({i})" for i in range(8)) + "/!"
        text = "/" * 30 + "?"
        assert _extract(template, text) is None


class TestLongTemplates:
    def test_long_parameter_chain(self) -> None:
        template = "/".join(f"(k{i})" for i in range(600))
        text = "/".join(str(i) for i in range(600))
        values = _extract(template, text)
        assert values is not None
        assert len(values) == 600
        assert values[0] == "0"
        assert values[-1] == "599"

    def test_long_chain_that_fails_at_the_end(self) -> None:
        template = "/".join(f"(k{i})" for i in range(600)) + ".json"
        text = "/".join(str(i) for i in range(600)) + ".xml"
        assert _extract(template, text) is None

    def test_long_literal_chain(self) -> None:
        template = "".join(f"x{i}-(p{i})." for i in range(1500))
        text = "".join(f"x{i}-{i}." for i in range(1500))
        values = _extract(template, text)
        assert values is not None
        assert values[1499] == "1499"
