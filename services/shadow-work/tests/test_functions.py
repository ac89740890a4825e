import pytest

from shadow_work.engine.errors import InvalidType
from shadow_work.engine.functions import (
    ALL_TYPES,
    FUNCTION_DESCRIPTIONS,
    function_name,
    resolve_dominant,
    resolve_inferior,
    resolve_stack,
    types_with_inferior,
)

ALL_FUNCTIONS = list(FUNCTION_DESCRIPTIONS)


def test_every_type_has_four_distinct_functions():
    assert len(ALL_TYPES) == 16
    for code in ALL_TYPES:
        stack = resolve_stack(code)
        assert len(set(stack)) == 4
        assert stack.inferior not in (stack.dominant, stack.auxiliary, stack.tertiary)
        assert set(stack) <= set(ALL_FUNCTIONS)


def test_stacks_are_distinct_across_types():
    stacks = {tuple(resolve_stack(code)) for code in ALL_TYPES}
    assert len(stacks) == 16


def test_resolution_is_stable():
    for code in ALL_TYPES:
        assert resolve_inferior(code) == resolve_inferior(code)
        assert resolve_dominant(code) == resolve_dominant(code)


@pytest.mark.parametrize("code,dominant,inferior", [
    ("INTJ", "Ni", "Se"),
    ("ENFP", "Ne", "Si"),
    ("ISTJ", "Si", "Ne"),
    ("ESFP", "Se", "Ni"),
    ("INFP", "Fi", "Te"),
    ("ESFJ", "Fe", "Ti"),
    ("ISTP", "Ti", "Fe"),
    ("ESTJ", "Te", "Fi"),
])
def test_known_stacks(code, dominant, inferior):
    assert resolve_dominant(code) == dominant
    assert resolve_inferior(code) == inferior


def test_inferior_is_opposite_attitude_and_kind_of_dominant():
    for code in ALL_TYPES:
        stack = resolve_stack(code)
        # S/N perceive, T/F judge.
        assert (stack.inferior[0] in "SN") == (stack.dominant[0] in "SN")
        assert stack.inferior[1] != stack.dominant[1]


def test_codes_are_normalized():
    assert resolve_inferior(" intj ") == "Se"


@pytest.mark.parametrize("value", ["XXXX", "", "INTJX", None, 42])
def test_unknown_type_raises(value):
    with pytest.raises(InvalidType) as excinfo:
        resolve_stack(value)
    assert excinfo.value.code == "invalid_type"


def test_types_with_inferior_partitions_all_types():
    grouped = [code for function in ALL_FUNCTIONS for code in types_with_inferior(function)]
    assert sorted(grouped) == sorted(ALL_TYPES)
    assert types_with_inferior("Se") == ["INTJ", "INFJ"]


def test_every_function_has_display_copy():
    assert len(ALL_FUNCTIONS) == 8
    assert function_name("Fe") == "Extraverted Feeling"
