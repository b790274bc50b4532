"""Tests for $NAME / ${NAME} interpolation."""

import pytest

from envload.models import ParseResult
from envload.parser import LineParser
from envload.resolver import InterpolationResolver, build_lookup, reference_name


def resolve(content: str, ambient: dict[str, str] | None = None) -> dict[str, str]:
    """Parse content into a fresh mapping and resolve it."""
    result = LineParser().parse(content)
    items = dict(result.entries)
    InterpolationResolver().resolve(result, items, ambient)
    return items


class TestReferenceName:
    """Tests for extracting the referenced name."""

    @pytest.mark.parametrize(
        ("value", "name"),
        [
            ("$A", "A"),
            ("${A}", "A"),
            ("$LONG_NAME_1", "LONG_NAME_1"),
            ("${A", "{A"),
            ("$A}", "A}"),
            ("$", ""),
            ("${}", ""),
            ("${{A}}", "{A}"),
        ],
    )
    def test_reference_name(self, value: str, name: str) -> None:
        """Braces are removed only when both are present."""
        assert reference_name(value) == name


class TestBuildLookup:
    """Tests for the combined lookup."""

    def test_items_take_precedence_over_ambient(self) -> None:
        """Parsed values win over ambient ones with the same name."""
        lookup = build_lookup({"A": "file"}, {"A": "ambient", "B": "ambient"})
        assert lookup == {"A": "file", "B": "ambient"}

    def test_no_ambient(self) -> None:
        """Without ambient variables only the items are used."""
        assert build_lookup({"A": "1"}, None) == {"A": "1"}


class TestInterpolationResolver:
    """Tests for InterpolationResolver.resolve."""

    def test_skips_when_not_flagged(self) -> None:
        """Nothing is rewritten when no value needs interpolation."""
        result = ParseResult(entries={"A": "$B"}, needs_interpolation=False)
        items = {"A": "$B"}
        assert InterpolationResolver().resolve(result, items, {"B": "x"}) == 0
        assert items == {"A": "$B"}

    def test_resolves_prior_value(self) -> None:
        """$A takes the value of A from the same file."""
        assert resolve("A=hello\nB=$A") == {"A": "hello", "B": "hello"}

    def test_resolves_braced_reference(self) -> None:
        """${A} behaves like $A."""
        assert resolve("A=hello\nB=${A}") == {"A": "hello", "B": "hello"}

    def test_resolves_later_value(self) -> None:
        """A reference may point at a key defined further down."""
        assert resolve("B=$A\nA=hello") == {"B": "hello", "A": "hello"}

    def test_resolves_ambient_value(self) -> None:
        """Names missing from the file fall back to the ambient environment."""
        assert resolve("B=$HOME", {"HOME": "/home/me"}) == {"B": "/home/me"}

    def test_file_value_beats_ambient(self) -> None:
        """A file value shadows an ambient variable of the same name."""
        items = resolve("HOME=/srv\nB=$HOME", {"HOME": "/home/me"})
        assert items["B"] == "/srv"

    def test_unresolvable_reference_is_empty(self) -> None:
        """A reference to an unknown name becomes the empty string."""
        assert resolve("B=$MISSING", {}) == {"B": ""}

    @pytest.mark.parametrize("value", ["$", "${}"])
    def test_empty_name_is_empty(self, value: str) -> None:
        """A reference with no name becomes the empty string."""
        assert resolve(f"B={value}", {"": "nope"}) == {"B": ""}

    def test_unclosed_brace_is_part_of_name(self) -> None:
        """${A without a closing brace looks up '{A'."""
        assert resolve("A=1\nB=${A") == {"A": "1", "B": ""}

    def test_embedded_reference_is_untouched(self) -> None:
        """References inside a longer value are not expanded."""
        items = resolve("HOST=localhost\nURL=http://$HOST\nREF=$HOST")
        assert items["URL"] == "http://$HOST"
        assert items["REF"] == "localhost"

    def test_reference_to_literal_value(self) -> None:
        """A=$B with B=literal resolves to the literal."""
        assert resolve("A=$B\nB=literal") == {"A": "literal", "B": "literal"}

    def test_chains_are_not_followed(self) -> None:
        """A reference to a reference gets the raw reference text."""
        items = resolve("A=$B\nB=$C\nC=x")
        assert items == {"A": "$C", "B": "x", "C": "x"}

    def test_self_reference_sees_raw_text(self) -> None:
        """A value referring to its own key sees its own raw text."""
        assert resolve("PATH=$PATH", {"PATH": "/usr/bin"}) == {"PATH": "$PATH"}

    def test_returns_number_of_rewritten_values(self) -> None:
        """resolve() counts each rewritten value."""
        result = LineParser().parse("A=1\nB=$A\nC=${A}\nD=$NOPE")
        items = dict(result.entries)
        assert InterpolationResolver().resolve(result, items, {}) == 3

    def test_earlier_values_are_resolved_too(self) -> None:
        """References already in the mapping are rewritten with the new pass."""
        result = LineParser().parse("B=$A")
        items = {"OLD": "$A", "A": "1", **result.entries}
        assert InterpolationResolver().resolve(result, items, None) == 2
        assert items == {"OLD": "1", "A": "1", "B": "1"}

    def test_ambient_references_are_written_to_items(self) -> None:
        """A $-value of the ambient environment is resolved into items."""
        items = resolve("B=$HOME", {"HOME": "/h", "FOO": "$HOME"})
        assert items == {"B": "/h", "FOO": "/h"}
