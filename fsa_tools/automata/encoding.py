"""encoding.py: write automata back out in their text encoding.

`encode_automaton` produces a canonical form: destination sets and
state lists are sorted, and spacing is fixed. Parsing the canonical
form of an automaton gives back an equal automaton, which is what
`round_trip_equal` checks.

"""

from . import builder
from .aut_parse import CALL_KEYWORD
from .fsa import NamedAlphabet

STYLES = ("brace", "call")


def _numarr(states):
    return "[{}]".format(", ".join(str(s) for s in sorted(states)))


def _alphabet_field(alphabet):
    if isinstance(alphabet, NamedAlphabet):
        return '"{}"'.format(alphabet.letters)
    return str(alphabet.size)


def encode_automaton(automaton, style="brace", newlines=False):
    """Get the text encoding of an automaton.

    Parameters
    ----------
    automaton : Automaton
        the automaton to encode

    style : string
        "brace" (the default) for `{...}`, or "call" for
        `Automaton(...);`

    newlines : bool
        if `True`, put the transitions of each state on their own
        line.

    Returns
    -------
    string
        canonical text encoding of the automaton

    Raises
    ------
    ValueError
        Raised for an unknown style, or for an automaton with no
        states or an empty alphabet, which the text format cannot
        express.

    """
    if style not in STYLES:
        raise ValueError("unknown encoding style '{}'".format(style))

    # the grammar needs at least one state row and one letter cell
    if automaton.state_count == 0 or automaton.alphabet_size == 0:
        raise ValueError(
            "automaton with {} states and {} letters has no text "
            "encoding".format(automaton.state_count, automaton.alphabet_size)
        )

    if newlines:
        separator = ",\n  "
        open_table, close_table = "[\n  ", "\n]"
    else:
        separator = ", "
        open_table, close_table = "[", "]"

    blocks = [
        "[{}]".format(", ".join(_numarr(cell) for cell in row))
        for row in automaton.transitions
    ]
    table = open_table + separator.join(blocks) + close_table

    core = '"{}", {}, {}, {}, {}, {}'.format(
        automaton.kind.value,
        automaton.state_count,
        _alphabet_field(automaton.alphabet),
        table,
        _numarr(automaton.initial_states),
        _numarr(automaton.final_states)
    )

    if style == "call":
        return "{}({});".format(CALL_KEYWORD, core)
    return "{{{}}}".format(core)


def canonical_form(text, style="brace"):
    """Parse automaton text and re-encode it canonically."""
    return encode_automaton(builder.from_string(text), style=style)


def round_trip_equal(automaton, style="brace"):
    """Check that encoding an automaton and parsing the result gives back
    an equal automaton."""
    text = encode_automaton(automaton, style=style)
    return builder.from_string(text) == automaton
