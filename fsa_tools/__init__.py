r"""
fsa_tools
=========

`fsa_tools` is a small Python package for reading finite-state
automata from a compact text encoding and running them on input words.

The package is built on top of [numpy](https://numpy.org) and
[scipy](https://scipy.org), and provides modules to:

- parse the text encoding of deterministic, nondeterministic and
  epsilon automata, with precise error positions

- validate parsed automata and build immutable `Automaton` objects

- compute epsilon-closures and run automata on words, holding the set
  of active states as a boolean vector and stepping it with sparse
  matrix products

- write automata back out in canonical form, determinize them, and
  enumerate the words they accept

## Example usage

```python
from fsa_tools.automata import builder

aut = builder.load_file("bns-2-2.aut")
aut.accepts([1, 2, 1])
```

The same thing from the command line:

```
fsa-run bns-2-2.aut 1 2 1
```

"""
