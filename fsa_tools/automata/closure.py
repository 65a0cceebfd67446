"""Compute epsilon-closures of sets of states.

The epsilon-closure of a set of states `S` is the smallest set
containing `S` which is closed under following epsilon edges. For
automata which are not epsilon automata, every set is its own closure.

`epsilon_closure` computes a closure from scratch. `ClosureTable`
computes the closure of every single state once, and then answers
closure queries for sets (or for boolean state vectors) by taking
unions.

"""

import logging
from collections import deque

import numpy as np
from scipy import sparse

from .errors import AutomatonRuntimeError
from .fsa import AutomatonKind

logger = logging.getLogger(__name__)


def _check_states(automaton, states):
    for state in states:
        if not 0 <= state < automaton.state_count:
            raise AutomatonRuntimeError(
                "state {} out of range for {} states".format(
                    state, automaton.state_count)
            )


def epsilon_closure(automaton, states):
    """Get the epsilon-closure of a set of states.

    Parameters
    ----------
    automaton : Automaton
        the automaton whose epsilon edges to follow

    states : iterable
        the states to close

    Returns
    -------
    frozenset
        the smallest superset of `states` closed under epsilon
        edges. If `automaton` is not an epsilon automaton, this is
        just `frozenset(states)`.

    """
    closed = set(states)
    _check_states(automaton, closed)

    epsilon = automaton.epsilon_index
    if epsilon is None:
        return frozenset(closed)

    transitions = automaton.transitions
    worklist = deque(closed)
    while len(worklist) > 0:
        state = worklist.pop()
        for head in transitions[state][epsilon]:
            if head not in closed:
                closed.add(head)
                worklist.append(head)

    return frozenset(closed)


class ClosureTable:
    """Precomputed epsilon-closures of the states of an automaton.

    The closures are stored as a sparse 0/1 matrix `C` with
    `C[t, s] = 1` whenever `t` is in the closure of `s`, so that the
    closure of a set given as a boolean vector `v` is `C @ v > 0`.
    A table is never modified after construction, so it can be shared
    freely between threads.

    """
    def __init__(self, automaton):
        self._automaton = automaton
        size = automaton.state_count

        if automaton.kind is AutomatonKind.EPSILON:
            self._closures = tuple(
                epsilon_closure(automaton, [state]) for state in range(size)
            )
        else:
            self._closures = tuple(frozenset([state])
                                   for state in range(size))

        tails = [state for state, closed in enumerate(self._closures)
                 for _ in closed]
        heads = [head for closed in self._closures for head in closed]

        self._matrix = sparse.csr_matrix(
            (np.ones(len(heads), dtype=np.int32), (heads, tails)),
            shape=(size, size)
        )
        logger.debug("closure table: %d states, %d closure pairs",
                     size, len(heads))

    @property
    def matrix(self):
        return self._matrix

    def state_closure(self, state):
        """Get the epsilon-closure of a single state."""
        return self._closures[state]

    def closure(self, states):
        """Get the epsilon-closure of a set of states, as a frozenset."""
        states = list(states)
        _check_states(self._automaton, states)
        closed = set()
        for state in states:
            closed |= self._closures[state]
        return frozenset(closed)

    def close_bitset(self, bitset):
        """Get the epsilon-closure of a set of states given as a boolean
        vector indexed by state.

        Returns
        -------
        ndarray
            boolean vector of the closed set

        """
        return self._matrix @ bitset.astype(np.int32) > 0
