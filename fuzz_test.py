import sys
from random import Random
from typing import List, NamedTuple

from hypothesis import given, register_random, settings
from hypothesis import strategies as st

from argbind import Arg, CardinalityError, Flag, Group, Opt, TokenStream, Var
from argbind.tokens import TokenType

MAX_ARGS = 8
MAX_OCCURRENCES = 4


class Declared(NamedTuple):
    parser: Group
    name: Var
    verbose: Var
    values: List[str]


def declare() -> Declared:
    name, verbose, values = Var(""), Var(False), []
    parser = Group(
        Opt(name, "name", "-n", "--name"),
        Flag(verbose, "-v", "--verbose"),
        Arg(values, "value"),
    )
    return Declared(parser, name, verbose, values)


st_value = st.text(alphabet=st.characters(blacklist_characters="-"))
st_args = st.lists(st.text(), max_size=MAX_ARGS)


@st.composite
def st_cardinality(draw):
    minimum = draw(st.integers(min_value=0, max_value=MAX_OCCURRENCES))
    maximum = minimum + draw(st.integers(min_value=0, max_value=MAX_OCCURRENCES))
    return minimum, maximum


@settings(deadline=None)
@given(st.lists(st_value, max_size=MAX_ARGS))
def test_values_route_to_positional(inputs):
    declared = declare()
    assert declared.parser.parse_args(inputs)
    assert declared.values == inputs
    assert declared.name.value == ""
    assert declared.verbose.value is False


@settings(deadline=None)
@given(st.lists(st.integers(min_value=0), max_size=MAX_ARGS))
def test_container_keeps_encounter_order(ints):
    values: List[int] = []
    cli = Group(Opt(values, "number", "-x", type=int))
    inputs = [word for i in ints for word in ("-x", str(i))]
    assert cli.parse_args(inputs)
    assert values == ints


@settings(deadline=None)
@given(st_value)
def test_joined_and_separate_forms_agree(value):
    joined, separate = Var(""), Var("")
    assert Group(Opt(joined, "opt", "--opt")).parse_args([f"--opt={value}"])
    assert Group(Opt(separate, "opt", "--opt")).parse_args(["--opt", value])
    assert joined.value == separate.value == value


@settings(deadline=None)
@given(st_args)
def test_parsing_is_idempotent(inputs):
    first, second = declare(), declare()
    r1 = first.parser.parse_args(inputs)
    r2 = second.parser.parse_args(inputs)
    assert r1 == r2
    assert (first.name, first.verbose, first.values) == (
        second.name,
        second.verbose,
        second.values,
    )


@settings(deadline=None)
@given(st_cardinality())
def test_minimum_occurrences_validate(cardinality):
    minimum, maximum = cardinality
    values: List[str] = []
    cli = Group(Opt(values, "v", "-v").cardinality(minimum, maximum))
    assert cli.parse_args(["-v", "x"] * minimum)
    if minimum > 0:
        error = cli.parse_args(["-v", "x"] * (minimum - 1)).error
        assert isinstance(error, CardinalityError)
        assert error.observed == minimum - 1


@settings(deadline=None)
@given(st_args)
def test_stream_positions_increase(inputs):
    stream = TokenStream.make(inputs)
    texts = stream.remaining()
    count = 0
    while stream:
        advanced = stream.advance()
        assert advanced.position > stream.position
        stream = advanced
        count += 1
    assert count == len(texts) >= len(inputs)
    assert TokenStream.make(inputs).remaining() == texts


@settings(deadline=None)
@given(st_args)
def test_split_values_are_arguments(inputs):
    tokens = list(TokenStream.make(inputs))
    for token, following in zip(tokens, tokens[1:]):
        if token.split and token.is_option:
            assert following.split
            assert following.type is TokenType.ARGUMENT


if __name__ == "__main__":
    register_random(Random(0))
    tests = {
        "route": test_values_route_to_positional,
        "order": test_container_keeps_encounter_order,
        "forms": test_joined_and_separate_forms_agree,
        "idempotent": test_parsing_is_idempotent,
        "cardinality": test_minimum_occurrences_validate,
        "stream": test_stream_positions_increase,
        "split": test_split_values_are_arguments,
    }
    for key in sys.argv[1:] or tests:
        tests[key]()
