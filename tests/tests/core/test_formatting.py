#!/usr/bin/env python3
import pytest

from crdsample.core.formatting import format_pydantic_errors_simple, _format_error_loc


# --- _format_error_loc --- #

@pytest.mark.parametrize("loc,expected", [
    (("spec", "versions", 0, "name"), "spec.versions[0].name"),
    ((0, "name"), "[0].name"),
    ((), "<root>"),
    ((0, 1, "x"), "[0][1].x"),
    (("a", 3, 2, "b"), "a[3][2].b"),
])
def test_format_error_loc(loc, expected):
    assert _format_error_loc(loc) == expected


# --- format_pydantic_errors_simple --- #

def test_format_pydantic_errors_simple_with_pydantic_like_errors():
    class FakeValidationError(Exception):
        def errors(self):
            return [
                {"loc": ("spec", "names", "kind"), "msg": "Field required"},
                {"loc": (), "msg": "Invalid payload"},
            ]

    assert format_pydantic_errors_simple(FakeValidationError("ignored")) == [
        "spec.names.kind: Field required",
        "<root>: Invalid payload",
    ]


def test_format_pydantic_errors_simple_without_errors_attr_uses_str_first_line():
    exc = ValueError("Boom!\nDetails that should be ignored")
    assert format_pydantic_errors_simple(exc) == ["Boom!"]


def test_format_pydantic_errors_simple_when_errors_method_raises_uses_str_first_line():
    class Exploding(Exception):
        def errors(self):
            raise RuntimeError("nope")

    assert format_pydantic_errors_simple(Exploding("Top line only\nand the rest")) == ["Top line only"]
