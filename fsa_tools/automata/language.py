"""Operations on the language accepted by an automaton.

`determinize` builds a deterministic automaton accepting the same
words as a given automaton (Rabin-Scott subset construction), and
`enumerate_words` lists the accepted words up to a given length.

"""

import logging
from collections import deque

from .closure import ClosureTable
from .fsa import Automaton, AutomatonKind, NamedAlphabet, SizedAlphabet
from ..utils.words import format_word

logger = logging.getLogger(__name__)


def _input_alphabet(automaton):
    """Alphabet of an automaton with the epsilon slot removed."""
    if automaton.kind is not AutomatonKind.EPSILON:
        return automaton.alphabet

    first = automaton.input_letters.start
    if isinstance(automaton.alphabet, NamedAlphabet):
        return NamedAlphabet(automaton.alphabet.letters[first:])
    return SizedAlphabet(automaton.alphabet_size - first)


def _successor(automaton, closures, subset, letter):
    heads = set()
    for state in subset:
        heads |= automaton.transitions[state][letter]
    return closures.closure(heads)


def determinize(automaton):
    """Get a deterministic automaton accepting the same words as
    `automaton`.

    States of the new automaton are the (epsilon-closed) sets of
    states reachable in the old one, numbered in breadth-first order
    from the initial set, which becomes state 0. The empty set, if
    reachable, becomes an ordinary non-accepting sink, so every cell of
    the new transition table holds exactly one state.

    For an epsilon automaton the epsilon slot is dropped from the
    alphabet: letter `i` of the new automaton is letter `i + 1` of
    the old one. Words given as strings are unaffected.

    Parameters
    ----------
    automaton : Automaton
        automaton of any kind

    Returns
    -------
    Automaton
        a deterministic automaton

    """
    closures = ClosureTable(automaton)
    letters = automaton.input_letters

    start = closures.closure(automaton.initial_states)
    numbering = {start: 0}
    to_visit = deque([start])
    rows = []

    while len(to_visit) > 0:
        subset = to_visit.popleft()
        row = []
        for letter in letters:
            target = _successor(automaton, closures, subset, letter)
            if target not in numbering:
                numbering[target] = len(numbering)
                to_visit.append(target)
            row.append([numbering[target]])
        rows.append(row)

    finals = [number for subset, number in numbering.items()
              if subset & automaton.final_states]

    logger.debug("determinized %d states into %d",
                 automaton.state_count, len(numbering))

    return Automaton(AutomatonKind.DETERMINISTIC, len(numbering),
                     _input_alphabet(automaton), rows, [0], finals)


def enumerate_fixed_length_words(automaton, length, with_states=False):
    """Enumerate all words of a fixed length accepted by the automaton.

    Parameters
    ----------
    automaton : Automaton
        the automaton whose language to enumerate

    length : int
        the length of the words we want to enumerate

    with_states : bool
        if `True`, also yield the set of states the automaton is in
        after reading each word.

    Yields
    ------
    word or (word, frozenset)
        accepted words, in lexicographic order of letter indices.
        Words are strings for named alphabets and tuples of letter
        indices otherwise.

    """
    closures = ClosureTable(automaton)
    for word, states in _paths(automaton, closures, length):
        if states & automaton.final_states:
            word = format_word(word, automaton.alphabet)
            if with_states:
                yield (word, states)
            else:
                yield word


def _paths(automaton, closures, length):
    if length <= 0:
        yield ((), closures.closure(automaton.initial_states))
        return

    for word, states in _paths(automaton, closures, length - 1):
        for letter in automaton.input_letters:
            target = _successor(automaton, closures, states, letter)
            if target:
                yield (word + (letter,), target)


def enumerate_words(automaton, max_length, with_states=False):
    """Enumerate all words up to a given length accepted by the
    automaton, shortest first.

    See `enumerate_fixed_length_words` for the format of the output.

    """
    for i in range(max_length + 1):
        for word in enumerate_fixed_length_words(
                automaton, i, with_states=with_states):
            yield word
