"""Hypothesis strategies for TraceLog values.

Provides strategies for each variant plus a recursive ``trace_logs``
strategy mixing all three.
"""

from hypothesis import strategies as st

from traced.models.log import EMPTY, Fact, Group

# Labels without newlines so rendered outlines stay one line per node
labels = st.text(
    min_size=0,
    max_size=30,
    alphabet=st.characters(whitelist_categories=("L", "N", "P", "Zs", "S")),
)

empties = st.just(EMPTY)

facts = st.builds(Fact, message=labels)

trace_logs = st.recursive(
    st.one_of(empties, facts),
    lambda children: st.builds(
        Group,
        label=st.one_of(st.none(), labels),
        children=st.lists(children, max_size=4).map(tuple),
    ),
    max_leaves=25,
)

groups = st.builds(
    Group,
    label=st.one_of(st.none(), labels),
    children=st.lists(trace_logs, max_size=4).map(tuple),
)

non_empty_logs = trace_logs.filter(lambda log: log is not EMPTY and log != EMPTY)
