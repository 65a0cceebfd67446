"""Exceptions raised while reading and running finite-state automata.

Every error raised by the `automata` subpackage derives from
`FSAException`, so callers which do not care about the failure
category can catch that. The three subclasses are kept distinct so
that a malformed file is never confused with a well-formed automaton
which simply rejects its input.

"""

class FSAException(Exception):
    pass

class AutomatonSyntaxError(FSAException):
    """Raised when automaton text does not match the grammar.

    Attributes
    ----------
    offset : int
        zero-based character offset of the offending token
    line : int
        one-based line number of the offending token
    column : int
        one-based column of the offending token
    expected : str
        description of the token class the parser wanted

    """
    def __init__(self, message, offset=0, line=1, column=1, expected=None):
        super().__init__(message)
        self.offset = offset
        self.line = line
        self.column = column
        self.expected = expected

class AutomatonSemanticError(FSAException):
    """Raised when a parsed automaton violates a model invariant.

    `field` names the part of the encoding at fault ("transitions",
    "initial", "final", "alphabet", ...) and `index` locates the
    offending entry inside it, when there is one.

    """
    def __init__(self, message, field=None, index=None):
        super().__init__(message)
        self.field = field
        self.index = index

class AutomatonRuntimeError(FSAException):
    pass
