"""aut_parse.py: read the text encoding of an automaton into a python
dictionary.

An encoded automaton looks like either

```
{"nondet", 3, 1, [[[1, 2]], [[]], [[]]], [0], [2]}
```

or, equivalently,

```
Automaton("nondet", 3, 1, [[[1, 2]], [[]], [[]]], [0], [2]);
```

The fields are the kind of automaton, the number of states, the
alphabet (a size, or a quoted string of letters), the transition
table, the initial states and the final states. Spaces and newlines
may appear between any two tokens; nothing else is skipped.

This module only checks that the text has the right shape. Checking
that the indices make sense is left to `builder`.

"""
import re

from .errors import AutomatonSyntaxError

WHITESPACE = " \n"
MAX_ERRLEN = 100

KINDS = ("det", "nondet", "epsilon")
CALL_KEYWORD = "Automaton"

_COUNT = re.compile(r"[0-9]+")
_QUOTED = re.compile(r'"([^"]*)"')
_LETTERS = re.compile(r"[a-zA-Z@]+\Z")


class _Scanner:
    def __init__(self, text):
        self.text = text
        self.pos = 0

    def skip_whitespace(self):
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def at_end(self):
        self.skip_whitespace()
        return self.pos >= len(self.text)

    def peek(self):
        self.skip_whitespace()
        return self.text[self.pos:self.pos + 1]

    def error(self, expected, pos=None):
        if pos is None:
            pos = self.pos
        line = self.text.count("\n", 0, pos) + 1
        column = pos - (self.text.rfind("\n", 0, pos) + 1) + 1

        if pos >= len(self.text):
            found = "end of input"
        else:
            found = repr(self.text[pos:pos + MAX_ERRLEN].split("\n")[0])

        raise AutomatonSyntaxError(
            "line {}, column {}: expected {}, found {}".format(
                line, column, expected, found),
            offset=pos, line=line, column=column, expected=expected
        )

    def accept(self, literal):
        self.skip_whitespace()
        if self.text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def expect(self, literal, expected=None):
        if not self.accept(literal):
            self.error(expected or "'{}'".format(literal))

    def count(self):
        self.skip_whitespace()
        match = _COUNT.match(self.text, self.pos)
        if not match:
            self.error("COUNT")
        self.pos = match.end()
        return int(match.group())

    def quoted(self, expected, valid):
        self.skip_whitespace()
        start = self.pos
        match = _QUOTED.match(self.text, self.pos)
        if not match or not valid(match.group(1)):
            self.error(expected, pos=start)
        self.pos = match.end()
        return match.group(1)


def parse_automaton(text):
    """Parse the text encoding of an automaton.

    Parameters
    ----------
    text : string
        the encoded automaton, in either the brace form or the
        `Automaton(...)` form.

    Returns
    -------
    dict
        A record with keys `type`, `states`, `alphabet`,
        `transitions`, `initial`, `final` and `wrapper`. `alphabet` is
        an int or a string of letters, `transitions` is a list of
        lists of lists of ints, and `wrapper` is "brace" or "call".

    Raises
    ------
    AutomatonSyntaxError
        Raised if the text does not match the grammar.

    """
    scanner = _Scanner(text)

    if scanner.accept("{"):
        record = _parse_core(scanner)
        scanner.expect("}", "',' or '}'")
        record["wrapper"] = "brace"
    elif scanner.accept(CALL_KEYWORD):
        scanner.expect("(")
        record = _parse_core(scanner)
        scanner.expect(")", "',' or ')'")
        while scanner.accept(";"):
            pass
        record["wrapper"] = "call"
    else:
        scanner.error("'{{' or '{}('".format(CALL_KEYWORD))

    if not scanner.at_end():
        scanner.error("end of input")

    return record


def _parse_core(scanner):
    record = {}
    record["type"] = scanner.quoted("TYPE", lambda kind: kind in KINDS)
    scanner.expect(",")
    record["states"] = scanner.count()
    scanner.expect(",")

    if scanner.peek() == '"':
        record["alphabet"] = scanner.quoted(
            "LETTERS", lambda letters: _LETTERS.match(letters) is not None
        )
    else:
        record["alphabet"] = scanner.count()

    scanner.expect(",")
    record["transitions"] = _parse_transitions(scanner)
    scanner.expect(",")
    record["initial"] = _parse_numarr(scanner)
    scanner.expect(",")
    record["final"] = _parse_numarr(scanner)
    return record


def _parse_transitions(scanner):
    scanner.expect("[", "TRANSITIONS")
    blocks = [_parse_block(scanner)]
    while scanner.accept(","):
        blocks.append(_parse_block(scanner))
    scanner.expect("]", "',' or ']'")
    return blocks


def _parse_block(scanner):
    scanner.expect("[", "letter block")
    cells = [_parse_numarr(scanner)]
    while scanner.accept(","):
        cells.append(_parse_numarr(scanner))
    scanner.expect("]", "',' or ']'")
    return cells


def _parse_numarr(scanner):
    scanner.expect("[", "NUMARR")
    values = []
    if scanner.accept("]"):
        return values

    values.append(scanner.count())
    while scanner.accept(","):
        values.append(scanner.count())
    scanner.expect("]", "',' or ']'")
    return values


def load_record_file(filename):
    with open(filename, 'rb') as autfile:
        data = autfile.read()

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        #bytes before the bad one decoded fine
        prefix = data[:e.start].decode("utf-8")
        line = prefix.count("\n") + 1
        column = len(prefix) - (prefix.rfind("\n") + 1) + 1
        raise AutomatonSyntaxError(
            "line {}, column {}: byte {!r} is not valid UTF-8".format(
                line, column, data[e.start:e.start + 1]),
            offset=e.start, line=line, column=column, expected="UTF-8 text"
        ) from e

    return parse_automaton(text)
