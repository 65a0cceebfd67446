import numbers

from ..automata.errors import AutomatonRuntimeError
from ..automata.fsa import NamedAlphabet

def letter_index(symbol, alphabet):
    """Convert one symbol of an input word to a letter index.

    Integers are returned unchanged (range checks are the caller's
    job). Single-character strings are looked up in a named alphabet,
    giving `None` for letters the alphabet does not contain.

    """
    if isinstance(symbol, numbers.Integral) and not isinstance(symbol, bool):
        return int(symbol)

    if isinstance(symbol, str) and len(symbol) == 1:
        if not isinstance(alphabet, NamedAlphabet):
            raise AutomatonRuntimeError(
                "letter {!r} given for an alphabet without letter "
                "names".format(symbol)
            )
        return alphabet.index(symbol)

    raise AutomatonRuntimeError(
        "cannot read {!r} as a letter".format(symbol)
    )

def letter_indices(word, alphabet):
    """Yield the letter indices of a word, given either as a string of
    letters or as a sequence of symbols accepted by `letter_index`."""
    if isinstance(word, str) and not isinstance(alphabet, NamedAlphabet):
        raise AutomatonRuntimeError(
            "string word {!r} given for an alphabet without letter "
            "names".format(word)
        )
    for symbol in word:
        yield letter_index(symbol, alphabet)

def format_word(indices, alphabet):
    """Inverse of `letter_indices`: a string for named alphabets, a tuple
    of indices otherwise."""
    if isinstance(alphabet, NamedAlphabet):
        return "".join(alphabet.letter(i) for i in indices)
    return tuple(indices)
