"""Property test: algebraic laws of the combinators.

Uses hypothesis to generate values and function choices, then checks that
the chains obey the identity / composition / equivalence laws and that
classification of rejection values is total.
"""

import asyncio

from hypothesis import given, settings, strategies as st

import futurechain as fc
from futurechain.future.unified_error import DomainFailure, UnknownFailure


class Tagged(fc.DomainError):
    pass


# Plain (non-future) values; floats omitted because NaN != NaN
VALUES = st.one_of(
    st.integers(),
    st.text(max_size=20),
    st.none(),
    st.booleans(),
    st.lists(st.integers(), max_size=5),
)

FUNCTIONS = st.sampled_from([
    lambda x: x,
    repr,
    lambda x: (x, x),
    lambda x: [x],
    lambda x: x is None,
])


def _run(coro):
    return asyncio.run(coro)


def _identity(err):
    return err


@settings(max_examples=50, deadline=None)
@given(value=VALUES)
def test_resolve_fulfills_with_value(value):
    async def scenario():
        return await fc.resolve(value)

    assert _run(scenario()) == value


@settings(max_examples=50, deadline=None)
@given(value=VALUES, f=FUNCTIONS)
def test_then_of_resolve_equals_map(value, f):
    async def scenario():
        via_then = await fc.resolve(value).then(lambda x: fc.resolve(f(x)))
        via_map = await fc.resolve(value).map(f)
        return via_then, via_map

    via_then, via_map = _run(scenario())
    assert via_then == via_map == f(value)


@settings(max_examples=50, deadline=None)
@given(value=VALUES, f=FUNCTIONS, g=FUNCTIONS)
def test_map_composition(value, f, g):
    async def scenario():
        chained = await fc.resolve(value).map(f).map(g)
        composed = await fc.resolve(value).map(lambda x: g(f(x)))
        return chained, composed

    chained, composed = _run(scenario())
    assert chained == composed


@settings(max_examples=50, deadline=None)
@given(value=VALUES)
def test_non_exception_rejection_is_unknown_failure(value):
    async def scenario():
        return await fc.reject(value).catch(_identity)

    assert _run(scenario()) == UnknownFailure(value)


@settings(max_examples=30, deadline=None)
@given(data=st.dictionaries(st.text(max_size=5), st.integers(), max_size=3))
def test_domain_error_survives_chain(data):
    async def scenario():
        return await (
            fc.reject(Tagged(data=data))
            .map(lambda v: v)
            .then(fc.resolve)
            .finally_(lambda: None)
            .catch(_identity)
        )

    assert _run(scenario()) == DomainFailure(Tagged(data=data))


@settings(max_examples=20, deadline=None)
@given(delays=st.lists(st.integers(min_value=0, max_value=5), min_size=1, max_size=6))
def test_all_preserves_input_order(delays):
    async def scenario():
        futures = [fc.delay(ms / 1000, index) for index, ms in enumerate(delays)]
        return await fc.all(futures)

    assert _run(scenario()) == list(range(len(delays)))


@settings(max_examples=20, deadline=None)
@given(delays=st.lists(st.integers(min_value=1, max_value=30), min_size=1, max_size=5, unique=True))
def test_race_settles_with_fastest(delays):
    async def scenario():
        futures = [fc.delay(ms / 1000, ms) for ms in delays]
        return await fc.race(futures)

    assert _run(scenario()) == min(delays)
