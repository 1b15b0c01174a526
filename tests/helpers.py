import hypothesis.strategies as st


def weights(min_size=0, max_size=20):
    """Lists of non-negative weights mixing the numeric types a caller might
    reasonably pass in."""
    return st.lists(
        st.integers(0, 1000) |
        st.fractions(min_value=0, max_value=100) |
        st.floats(0, 1000),
        min_size=min_size, max_size=max_size,
    )


def valid_weights(max_size=20):
    return weights(min_size=1, max_size=max_size).filter(
        lambda ws: sum(ws) > 0)


def exact_weights(max_size=20):
    """Weights which can be scaled without any rounding."""
    return st.lists(
        st.integers(0, 1000) | st.fractions(min_value=0, max_value=100),
        min_size=1, max_size=max_size,
    ).filter(any)


labels = st.one_of(
    st.integers(), st.text(max_size=5), st.tuples(st.integers(), st.booleans())
)
