"""builder.py: turn parsed automaton records into `Automaton` objects,
and load automata from files.

The parser in `aut_parse` only knows about brackets and commas. This
module checks everything else: that the transition table has one row
per state and one cell per letter, that every state index is in
range, that deterministic automata really are deterministic, and that
the reserved epsilon letter is used correctly.

"""

import logging
from importlib import resources

from . import aut_parse
from .errors import AutomatonSemanticError
from .fsa import (Automaton, AutomatonKind, NamedAlphabet, SizedAlphabet,
                  EPSILON_LETTER, EPSILON_INDEX)

logger = logging.getLogger(__name__)

BUILTIN_DIR = "builtin"
BUILTIN_SUFFIX = ".aut"

#what to do with a destination listed twice in one transition cell
DUPLICATE_POLICIES = ("collapse", "error")

RECORD_FIELDS = ("type", "states", "alphabet", "transitions",
                 "initial", "final")


def build_automaton(record, duplicates="collapse"):
    """Build an automaton from a parsed record.

    Parameters
    ----------
    record : dict
        record in the format produced by
        `aut_parse.parse_automaton`

    duplicates : string
        policy for destination states listed more than once in the
        same transition cell. "collapse" (the default) treats the
        cell as a set; "error" raises `AutomatonSemanticError`.

    Returns
    -------
    Automaton
        the automaton described by the record

    Raises
    ------
    AutomatonSemanticError
        Raised if the record describes an invalid automaton.

    """
    if duplicates not in DUPLICATE_POLICIES:
        raise ValueError("unknown duplicate policy '{}' (expected one of {})"
                         .format(duplicates, ", ".join(DUPLICATE_POLICIES)))

    for field in RECORD_FIELDS:
        if field not in record:
            raise AutomatonSemanticError(
                "automaton record has no '{}' field".format(field),
                field=field
            )

    try:
        kind = AutomatonKind(record["type"])
    except ValueError:
        raise AutomatonSemanticError(
            "unknown automaton type '{}'".format(record["type"]),
            field="type"
        )

    state_count = record["states"]
    alphabet = _build_alphabet(kind, record["alphabet"])
    transitions = _build_transitions(kind, state_count, alphabet.size,
                                     record["transitions"], duplicates)
    initial = _build_state_set("initial", record["initial"], state_count)
    final = _build_state_set("final", record["final"], state_count)

    if kind is AutomatonKind.DETERMINISTIC and len(initial) > 1:
        raise AutomatonSemanticError(
            "deterministic automaton has {} initial states".format(
                len(initial)),
            field="initial"
        )

    logger.debug("built %s automaton: %d states, alphabet size %d",
                 kind, state_count, alphabet.size)

    return Automaton(kind, state_count, alphabet, transitions,
                     initial, final)


def _build_alphabet(kind, alphabet):
    if not isinstance(alphabet, str):
        return SizedAlphabet(alphabet)

    for i, letter in enumerate(alphabet):
        if alphabet.index(letter) != i:
            raise AutomatonSemanticError(
                "letter '{}' appears more than once in the alphabet".format(
                    letter),
                field="alphabet", index=i
            )

    reserved = [i for i, letter in enumerate(alphabet)
                if letter == EPSILON_LETTER]

    if kind is AutomatonKind.EPSILON:
        if alphabet[EPSILON_INDEX:EPSILON_INDEX + 1] != EPSILON_LETTER:
            raise AutomatonSemanticError(
                "epsilon automaton alphabet must start with '{}'".format(
                    EPSILON_LETTER),
                field="alphabet", index=EPSILON_INDEX
            )
        reserved.remove(EPSILON_INDEX)

    if reserved:
        raise AutomatonSemanticError(
            "letter '{}' is reserved for epsilon edges".format(
                EPSILON_LETTER),
            field="alphabet", index=reserved[0]
        )

    return NamedAlphabet(alphabet)


def _check_state(field, state, state_count, index):
    if not 0 <= state < state_count:
        raise AutomatonSemanticError(
            "{}: state {} out of range for {} states".format(
                field, state, state_count),
            field=field, index=index
        )


def _build_transitions(kind, state_count, alphabet_size, table, duplicates):
    if len(table) != state_count:
        raise AutomatonSemanticError(
            "transition table has {} rows, but the automaton has {} states"
            .format(len(table), state_count),
            field="transitions"
        )

    rows = []
    for state, block in enumerate(table):
        if len(block) != alphabet_size:
            raise AutomatonSemanticError(
                "state {} has {} transition cells, but the alphabet has {} "
                "letters".format(state, len(block), alphabet_size),
                field="transitions", index=(state,)
            )

        row = []
        for letter, destinations in enumerate(block):
            for head in destinations:
                _check_state("transitions", head, state_count,
                             (state, letter))

            cell = frozenset(destinations)
            if len(cell) != len(destinations) and duplicates == "error":
                raise AutomatonSemanticError(
                    "duplicate destination in transition cell ({}, {})"
                    .format(state, letter),
                    field="transitions", index=(state, letter)
                )

            if kind is AutomatonKind.DETERMINISTIC and len(cell) > 1:
                raise AutomatonSemanticError(
                    "deterministic automaton has {} destinations for state "
                    "{} and letter {}".format(len(cell), state, letter),
                    field="transitions", index=(state, letter)
                )
            row.append(cell)
        rows.append(tuple(row))

    return tuple(rows)


def _build_state_set(field, states, state_count):
    for i, state in enumerate(states):
        _check_state(field, state, state_count, i)
    return frozenset(states)


def from_string(text, duplicates="collapse"):
    """Parse and build an automaton from its text encoding.

    Raises `AutomatonSyntaxError` for malformed text and
    `AutomatonSemanticError` for well-formed text describing an
    invalid automaton.

    """
    return build_automaton(aut_parse.parse_automaton(text),
                           duplicates=duplicates)


def load_file(filename, duplicates="collapse") -> Automaton:
    """Build an automaton from a file containing its text encoding.

    Parameters
    ----------
    filename : string
        the file containing the encoded automaton

    duplicates : string
        duplicate destination policy, see `build_automaton`

    Returns
    -------
    Automaton
        The automaton described by the file.

    """
    logger.debug("loading automaton from %s", filename)
    record = aut_parse.load_record_file(filename)
    return build_automaton(record, duplicates=duplicates)


def _builtin_files():
    return resources.files(__package__).joinpath(BUILTIN_DIR)


def load_builtin(filename):
    """Load an automaton built in to the automata subpackage.

    Parameters
    ----------
    filename : string
        Name of the automaton file to load

    Returns
    -------
    Automaton
        automaton read from this file

    """
    aut_string = _builtin_files().joinpath(filename).read_text(
        encoding="utf-8")
    return from_string(aut_string)


def list_builtins():
    """Return a list of all the automata included with the automata
    subpackage.

    """
    return sorted(entry.name for entry in _builtin_files().iterdir()
                  if entry.name.endswith(BUILTIN_SUFFIX))
