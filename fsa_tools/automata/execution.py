"""Run finite-state automata on input words.

The entry points are `accepts`, which decides whether an automaton
accepts a word, and `run`, which lazily yields the state of the
automaton before reading the word and after each of its letters.

Both are implemented by an `Executor`, which looks at the kind of
automaton once and prepares the data for one of three algorithms:

- deterministic automata walk a table of next states, holding a single
  current state;

- nondeterministic automata hold the set of active states as a
  boolean vector indexed by state, and step it with one sparse
  matrix-vector product per letter;

- epsilon automata do the same, with the step matrices premultiplied
  by the epsilon-closure matrix so that the active set stays closed
  after every letter.

An executor is built once per automaton and never modified afterwards,
so it can be shared between threads. `Automaton.executor` caches one.

Letters outside the alphabet (including the epsilon letter of an
epsilon automaton, which cannot be read from input) do not raise an
error: the automaton gets stuck, and the word is rejected.

"""

import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from scipy import sparse

from .closure import ClosureTable
from .fsa import AutomatonKind
from ..utils.words import letter_indices

logger = logging.getLogger(__name__)

#transition table entry for "no edge" in deterministic automata
STUCK = -1


class Executor:
    """Executor: precomputed data for running one automaton.

    """
    def __init__(self, automaton):
        self.automaton = automaton
        self._letters = frozenset(automaton.input_letters)
        self._initial = sorted(automaton.initial_states)

        kind = automaton.kind
        if kind is AutomatonKind.DETERMINISTIC:
            self._prepare_deterministic()
            self._accepts = self._accepts_deterministic
            self._run = self._run_deterministic
        else:
            # for epsilon automata the start set and step matrices come
            # out of preparation already closed
            closure = None
            if kind is AutomatonKind.EPSILON:
                closure = ClosureTable(automaton)
            self._prepare_nondeterministic(closure)
            self._accepts = self._accepts_bitset
            self._run = self._run_bitset

        logger.debug("prepared executor for %s automaton with %d states",
                     kind, automaton.state_count)

    def _letters_of(self, word):
        for letter in letter_indices(word, self.automaton.alphabet):
            if letter in self._letters:
                yield letter
            else:
                yield None

    def accepts(self, word):
        """Determine if the automaton accepts a word.

        Parameters
        ----------
        word : sequence or string
            letter indices, or a string of letters for a named
            alphabet

        Returns
        -------
        bool
            True if the word is accepted.

        Raises
        ------
        AutomatonRuntimeError
            Raised if some symbol of the word cannot be read as a
            letter at all (as opposed to a letter outside the
            alphabet, which just causes rejection). The whole word
            is read before the automaton runs, so this does not
            depend on where the automaton gets stuck.

        """
        return self._accepts(list(self._letters_of(word)))

    def run(self, word):
        """Yield the execution state before reading `word`, then after each
        of its letters.

        For deterministic automata the execution state is a state
        index, or `None` once the automaton is stuck. For the other
        kinds it is the frozenset of active states.

        """
        return self._run(list(self._letters_of(word)))

    # deterministic automata

    def _prepare_deterministic(self):
        automaton = self.automaton
        table = np.full((automaton.state_count, automaton.alphabet_size),
                        STUCK, dtype=np.intp)
        for tail, head, letter in automaton.edges():
            table[tail, letter] = head

        self.table = table
        self._rows = table.tolist()
        self._final_flags = [state in automaton.final_states
                             for state in range(automaton.state_count)]
        self._start = self._initial[0] if self._initial else None

    def _accepts_deterministic(self, letters):
        rows = self._rows
        state = self._start
        if state is None:
            return False

        for letter in letters:
            if letter is None:
                return False
            state = rows[state][letter]
            if state == STUCK:
                return False

        return self._final_flags[state]

    def _run_deterministic(self, letters):
        rows = self._rows
        state = self._start
        yield state

        for letter in letters:
            if state is not None:
                if letter is None:
                    state = None
                else:
                    state = rows[state][letter]
                    if state == STUCK:
                        state = None
            yield state

    # nondeterministic and epsilon automata

    def _prepare_nondeterministic(self, closure):
        automaton = self.automaton
        size = automaton.state_count

        heads = [[] for _ in range(automaton.alphabet_size)]
        tails = [[] for _ in range(automaton.alphabet_size)]
        for tail, head, letter in automaton.edges():
            heads[letter].append(head)
            tails[letter].append(tail)

        self.step_matrices = [None] * automaton.alphabet_size
        for letter in self._letters:
            step = sparse.csr_matrix(
                (np.ones(len(heads[letter]), dtype=np.int32),
                 (heads[letter], tails[letter])),
                shape=(size, size)
            )
            if closure is not None:
                step = (closure.matrix @ step > 0).astype(np.int32)
            self.step_matrices[letter] = step

        self.closure_table = closure
        self.final_mask = np.zeros(size, dtype=bool)
        self.final_mask[sorted(automaton.final_states)] = True

        start = np.zeros(size, dtype=bool)
        start[self._initial] = True
        if closure is not None:
            start = closure.close_bitset(start)
        self.start_bitset = start

    def _step(self, active, letter):
        if letter is None:
            return np.zeros_like(active)
        return self.step_matrices[letter] @ active.astype(np.int32) > 0

    def _accepts_bitset(self, letters):
        active = self.start_bitset
        for letter in letters:
            if not active.any():
                return False
            active = self._step(active, letter)
        return bool(np.any(active & self.final_mask))

    def _run_bitset(self, letters):
        active = self.start_bitset
        yield _as_states(active)

        for letter in letters:
            if active.any():
                active = self._step(active, letter)
            yield _as_states(active)


def _as_states(bitset):
    return frozenset(np.flatnonzero(bitset).tolist())


def accepts(automaton, word):
    """Determine if `automaton` accepts `word`. See `Executor.accepts`."""
    return automaton.executor.accepts(word)


def run(automaton, word):
    """Yield the execution trace of `automaton` on `word`. See
    `Executor.run`."""
    return automaton.executor.run(word)


def accepts_many(automaton, words, max_workers=None):
    """Decide acceptance for many words at once.

    The words are run in a thread pool, all sharing the automaton's
    executor.

    Parameters
    ----------
    automaton : Automaton
        the automaton to run

    words : iterable
        words to run, in any format accepted by `accepts`

    max_workers : int
        size of the thread pool. If `None`, use the
        `concurrent.futures` default.

    Returns
    -------
    list
        list of booleans, in the same order as `words`

    """
    executor = automaton.executor
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(executor.accepts, words))
