r"""Parse and run finite-state automata.

The `automata` package reads automata from a compact text encoding
(see `fsa_tools.automata.aut_parse`) and runs them on input words.
Below, we build a nondeterministic automaton with three states over a
one-letter alphabet, in which state 0 can move to either state 1 or
state 2:

```python

from fsa_tools.automata import builder

aut = builder.from_string(
    '{"nondet", 3, 1, [[[1, 2]], [[]], [[]]], [0], [2]}'
)

aut.accepts([0])
aut.accepts([0, 0])

```
	True
	False

Three kinds of automata are supported: deterministic ("det"),
nondeterministic ("nondet") and nondeterministic with epsilon edges
("epsilon"). In an epsilon automaton, letter 0 of the alphabet labels
the epsilon edges; with a named alphabet, that letter must be `@`.

A few example automata ship with the package:

```python

from fsa_tools.automata import builder
builder.list_builtins()

```

The package does *not* generate automata. Automata produced elsewhere
(for instance by GAP scripts) can be loaded with
`fsa_tools.automata.builder.load_file`, once any line-continuation
backslashes have been stripped from the generated text.

"""
