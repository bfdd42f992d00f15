from __future__ import annotations

import dataclasses

from nshassert._format import MISSING, format_value, format_values, pair_values


@dataclasses.dataclass
class Point:
    x: int
    y: int


def test_pair_values():
    assert pair_values(("a", 1, "b", 2)) == [("a", 1), ("b", 2)]
    assert pair_values(()) == []


def test_pair_values_pads_odd_tail():
    assert pair_values(("a", 1, "b")) == [("a", 1), ("b", MISSING)]
    assert pair_values(("only",)) == [("only", MISSING)]


def test_pair_values_appends_named():
    assert pair_values(("a", 1, "b"), {"c": 3, "d": 4}) == [
        ("a", 1),
        ("b", MISSING),
        ("c", 3),
        ("d", 4),
    ]


def test_empty_has_no_header():
    assert format_values([]) == ""


def test_format_values():
    block = format_values([("name", "value"), ("count", 42), ("nothing", None)])
    assert block == (
        "\n\nRelevant values:\n"
        f"  [name]: {'value'!r}\n"
        "  [count]: 42\n"
        "  [nothing]: None\n"
    )


def test_order_and_duplicates_preserved():
    block = format_values([("z", 1), ("a", 2), ("z", 3)])
    assert block.splitlines()[3:] == ["  [z]: 1", "  [a]: 2", "  [z]: 3"]


def test_missing_sentinel():
    assert format_value(MISSING) == "(MISSING)"
    assert "  [key]: (MISSING)\n" in format_values(pair_values(("key",)))


def test_missing_is_not_the_string():
    assert format_value("(MISSING)") != format_value(MISSING)


def test_empty_containers_are_distinct():
    rendered = {format_value(v) for v in ("", [], {}, (), None)}
    assert len(rendered) == 5


def test_dataclass_value():
    assert "Point(" in format_value(Point(1, 2))


def test_non_string_labels():
    assert "  [3]: 4\n" in format_values(pair_values((3, 4)))


def test_multiline_values_are_indented():
    block = format_values([("numbers", list(range(100)))])
    value_lines = block.split("\n")[3:-1]
    assert len(value_lines) > 1
    assert value_lines[0].startswith("  [numbers]: ")
    assert all(line.startswith("    ") for line in value_lines[1:])
