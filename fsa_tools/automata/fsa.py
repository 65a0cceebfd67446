"""Work with finite-state automata.

An automaton here is a finite directed labeled graph on the vertices
`0, ..., n-1`, where the edge labels are indices into an alphabet. A
subset of the vertices are "start states" and another subset are
"final states". Depending on its kind, an automaton may have several
edges with the same label leaving a vertex (a nondeterministic
automaton), and may have "epsilon" edges which can be followed without
reading any input (an epsilon automaton).

This module provides the `Automaton` class, an immutable description
of such a graph. Automata are normally produced by parsing their text
encoding:

```python
from fsa_tools.automata import builder

# a deterministic automaton accepting binary numbers divisible by 3
mult3 = builder.load_builtin("binary_mult3.aut")

mult3.accepts([1, 1, 0])
```
    True

"""

import enum
import numbers

#letter reserved for epsilon edges in named alphabets
EPSILON_LETTER = "@"

#position of the epsilon slot in the alphabet of an epsilon automaton
EPSILON_INDEX = 0


class AutomatonKind(enum.Enum):
    """The three kinds of automaton, named as they are in the text
    encoding."""
    DETERMINISTIC = "det"
    NONDETERMINISTIC = "nondet"
    EPSILON = "epsilon"

    def __str__(self):
        return self.value


class Alphabet:
    """Base class for the two ways of specifying an alphabet.

    Letters are always addressed by index; `size` is the number of
    valid indices regardless of how the alphabet was written down.

    """
    @property
    def size(self):
        raise NotImplementedError

    def __len__(self):
        return self.size

    def index(self, letter):
        """Get the index of a letter, or `None` if the letter is not part of
        this alphabet."""
        raise NotImplementedError

    def letter(self, index):
        raise NotImplementedError


class SizedAlphabet(Alphabet):
    """An alphabet given only by its size. Letters are the integers
    `0, ..., size - 1`.
    """
    def __init__(self, size):
        self._size = int(size)

    @property
    def size(self):
        return self._size

    def index(self, letter):
        if (isinstance(letter, numbers.Integral) and
            not isinstance(letter, bool) and 0 <= letter < self._size):
            return int(letter)
        return None

    def letter(self, index):
        if not 0 <= index < self._size:
            raise IndexError("letter index {} out of range".format(index))
        return index

    def __eq__(self, other):
        return isinstance(other, SizedAlphabet) and other._size == self._size

    def __hash__(self):
        return hash(("sized", self._size))

    def __repr__(self):
        return "SizedAlphabet({})".format(self._size)


class NamedAlphabet(Alphabet):
    """An alphabet given by an ordered string of single-character
    letters. The index of a letter is its position in the string.
    """
    def __init__(self, letters):
        self._letters = str(letters)
        self._indices = {let: i for i, let in enumerate(self._letters)}

    @property
    def size(self):
        return len(self._letters)

    @property
    def letters(self):
        return self._letters

    def index(self, letter):
        return self._indices.get(letter)

    def letter(self, index):
        return self._letters[index]

    def __eq__(self, other):
        return (isinstance(other, NamedAlphabet) and
                other._letters == self._letters)

    def __hash__(self):
        return hash(("named", self._letters))

    def __repr__(self):
        return "NamedAlphabet({!r})".format(self._letters)


class Automaton:
    """Automaton: an immutable finite-state automaton.

    The transition table is a tuple with one entry per state. Each
    entry is a tuple with one entry per letter of the alphabet, and
    each of those is a frozenset of destination states:

    ```
    (
      (dests(0, letter0), dests(0, letter1), ...),
      (dests(1, letter0), dests(1, letter1), ...),
      ...
    )
    ```

    The constructor does not check its input; use
    `fsa_tools.automata.builder` to get a validated automaton from
    its text encoding.

    """
    def __init__(self, kind, state_count, alphabet, transitions,
                 initial_states=(), final_states=()):
        """

        Parameters
        ----------
        kind : AutomatonKind or str
            kind of the automaton, or its name in the encoding
            ("det", "nondet" or "epsilon")

        state_count : int
            number of states. States are `0, ..., state_count - 1`.

        alphabet : Alphabet or int or str
            the alphabet. An int is taken as the size of a
            `SizedAlphabet`, a string as the letters of a
            `NamedAlphabet`.

        transitions : nested iterable
            `transitions[state][letter]` is an iterable of
            destination states.

        initial_states : iterable
            start states of the automaton

        final_states : iterable
            accepting states of the automaton

        """
        self._kind = AutomatonKind(kind)
        self._state_count = int(state_count)

        if isinstance(alphabet, Alphabet):
            self._alphabet = alphabet
        elif isinstance(alphabet, str):
            self._alphabet = NamedAlphabet(alphabet)
        else:
            self._alphabet = SizedAlphabet(alphabet)

        self._transitions = tuple(
            tuple(frozenset(cell) for cell in row)
            for row in transitions
        )
        self._initial_states = frozenset(initial_states)
        self._final_states = frozenset(final_states)
        self._executor = None

    def __str__(self):
        return "{} automaton with {} states over {!r}:\n{}".format(
            self._kind, self._state_count, self._alphabet,
            self.graph_dict
        )

    def __repr__(self):
        return "Automaton({!r}, {}, {!r}, initial={}, final={})".format(
            self._kind.value, self._state_count, self._alphabet,
            sorted(self._initial_states), sorted(self._final_states)
        )

    def __eq__(self, other):
        if not isinstance(other, Automaton):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def _key(self):
        return (self._kind, self._state_count, self._alphabet,
                self._transitions, self._initial_states,
                self._final_states)

    @property
    def kind(self):
        return self._kind

    @property
    def state_count(self):
        return self._state_count

    @property
    def alphabet(self):
        return self._alphabet

    @property
    def alphabet_size(self):
        return self._alphabet.size

    @property
    def transitions(self):
        return self._transitions

    @property
    def initial_states(self):
        return self._initial_states

    @property
    def final_states(self):
        return self._final_states

    @property
    def epsilon_index(self):
        """Letter index of epsilon edges, or `None` if this is not an
        epsilon automaton."""
        if self._kind is AutomatonKind.EPSILON:
            return EPSILON_INDEX
        return None

    @property
    def input_letters(self):
        """Range of letter indices which can be read from an input word.

        This is the whole alphabet, minus the epsilon slot for epsilon
        automata.
        """
        if self._kind is AutomatonKind.EPSILON:
            return range(EPSILON_INDEX + 1, self.alphabet_size)
        return range(self.alphabet_size)

    @property
    def graph_dict(self):
        """Dictionary of the form `{state: {letter: [destinations]}}`,
        omitting empty cells."""
        return {
            state: {
                self._alphabet.letter(letter): sorted(cell)
                for letter, cell in enumerate(row) if cell
            }
            for state, row in enumerate(self._transitions)
        }

    def destinations(self, state, letter):
        """Get the set of states reached from `state` by an edge labeled
        `letter`."""
        return self._transitions[state][letter]

    def edges(self):
        """Get all of the edges of this automaton.

        Yields
        ------
        tuple
            A triple of the form `(tail, head, letter)` for each edge
            in the automaton, with `letter` a letter index.

        """
        for tail, row in enumerate(self._transitions):
            for letter, cell in enumerate(row):
                for head in sorted(cell):
                    yield (tail, head, letter)

    def states(self):
        return range(self._state_count)

    @property
    def executor(self):
        """The (lazily built, then reused) `Executor` running this
        automaton."""
        if self._executor is None:
            from .execution import Executor
            self._executor = Executor(self)
        return self._executor

    def accepts(self, word):
        """Determine if this automaton accepts a given word.

        Parameters
        ----------
        word : sequence or string
            sequence of letter indices, or a string of letters if the
            alphabet is named

        Returns
        -------
        bool
            True if word is accepted by the automaton, False
            otherwise. Words containing letters outside the alphabet
            are rejected.

        """
        return self.executor.accepts(word)

    def run(self, word):
        """Yield the execution state before reading `word` and after each
        of its letters. See `fsa_tools.automata.execution.run`."""
        return self.executor.run(word)
