"""Property-based tests for the container using Hypothesis."""
from hypothesis import given, settings, strategies as st

from assemble import AssemblyKey, Container

tokens = st.text(min_size=0, max_size=30)
values = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.text(),
    st.lists(st.integers(), max_size=5),
    st.dictionaries(st.text(max_size=5), st.integers(), max_size=5),
)


class Collect:
    def __init__(self, *args):
        self.args = args


# =============================================================================
# Value Entries
# =============================================================================

@given(tokens, values)
def test_value_is_returned_unchanged(token, value):
    """Property: a registered value is returned by identity on every get."""
    container = Container()
    container.register({"token": token, "value": value})

    assert container.get(token) is value
    assert container.get(token) is value


@given(tokens, st.lists(values, min_size=1, max_size=5))
def test_first_registration_always_wins(token, registered):
    """Property: later registrations of a token never shadow the first."""
    container = Container()
    for value in registered:
        container.register({"token": token, "value": value})

    assert container.get(token) is registered[0]
    assert len(container) == len(registered)


@given(tokens)
def test_token_keys_match_by_value(token):
    """Property: equal strings always make equal keys."""
    assert AssemblyKey.of(token) == AssemblyKey.of("".join(list(token)))


# =============================================================================
# Dependency Order
# =============================================================================

@given(st.lists(st.tuples(tokens, values), min_size=0, max_size=8, unique_by=lambda tv: tv[0]))
@settings(max_examples=50)
def test_dependencies_arrive_in_declaration_order(pairs):
    """Property: the constructor receives resolved dependencies positionally."""
    container = Container()
    for token, value in pairs:
        container.register({"token": token, "value": value})
    container.register(
        {"class": Collect, "is_singleton": False, "dependencies": [t for t, _ in pairs]}
    )

    instance = container.get(Collect)

    assert len(instance.args) == len(pairs)
    assert all(arg is value for arg, (_, value) in zip(instance.args, pairs))
