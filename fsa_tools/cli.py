"""Command-line entry point: run an automaton file on one input word.

```
fsa-run automaton.aut 0 1 1
fsa-run automaton.aut --word abba
```

Prints `accept` or `reject`. The exit status tells the outcomes apart,
so that scripts never mistake a malformed file for a rejected word:

- 0: the word was accepted
- 1: the word was rejected
- 2: the file does not match the automaton grammar
- 3: the file describes an invalid automaton
- 4: the word could not be run
- 5: the file could not be read

"""

import argparse
import logging
import sys
import time

from .automata import builder
from .automata.builder import DUPLICATE_POLICIES
from .automata.errors import (AutomatonRuntimeError, AutomatonSemanticError,
                              AutomatonSyntaxError)
from .utils.logging_config import LOG_LEVELS, setup_logging

logger = logging.getLogger(__name__)

EXIT_ACCEPT = 0
EXIT_REJECT = 1
EXIT_SYNTAX_ERROR = 2
EXIT_SEMANTIC_ERROR = 3
EXIT_RUNTIME_ERROR = 4
EXIT_IO_ERROR = 5


def _symbol(text):
    try:
        return int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(
            "letter indices must be integers, got '{}'".format(text))


def build_parser():
    parser = argparse.ArgumentParser(
        prog="fsa-run",
        description="Parse an automaton file and decide whether it "
        "accepts an input word (the empty word by default)."
    )
    parser.add_argument("file", help="file containing an encoded automaton")
    parser.add_argument("symbols", nargs="*", type=_symbol, metavar="SYMBOL",
                        help="letter indices of the input word")
    parser.add_argument("--word",
                        help="input word as a string of letters "
                        "(named alphabets only)")
    parser.add_argument("--trace", action="store_true",
                        help="print the execution state after each letter")
    parser.add_argument("--duplicates", choices=DUPLICATE_POLICIES,
                        default="collapse",
                        help="how to treat repeated destinations in a "
                        "transition cell (default: collapse)")
    parser.add_argument("-t", "--timed", action="store_true",
                        help="print the time taken to parse and run")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING",
                        help="logging level (default: WARNING)")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)
    setup_logging(args.log_level)

    if args.word is not None and args.symbols:
        parser.error("give either SYMBOLs or --word, not both")

    word = args.word if args.word is not None else args.symbols
    start = time.perf_counter()

    try:
        automaton = builder.load_file(args.file, duplicates=args.duplicates)
    except OSError as e:
        print("error: cannot read {}: {}".format(args.file, e),
              file=sys.stderr)
        return EXIT_IO_ERROR
    except AutomatonSyntaxError as e:
        print("syntax error in {}: {}".format(args.file, e), file=sys.stderr)
        return EXIT_SYNTAX_ERROR
    except AutomatonSemanticError as e:
        print("invalid automaton in {}: {}".format(args.file, e),
              file=sys.stderr)
        return EXIT_SEMANTIC_ERROR

    logger.info("loaded %s automaton with %d states from %s",
                automaton.kind, automaton.state_count, args.file)

    try:
        if args.trace:
            for step, state in enumerate(automaton.run(word)):
                print("{}: {}".format(step, _format_state(state)))
        accepted = automaton.accepts(word)
    except AutomatonRuntimeError as e:
        print("error: {}".format(e), file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    print("accept" if accepted else "reject")

    if args.timed:
        print("Time taken: {:.6f} seconds.".format(
            time.perf_counter() - start))

    return EXIT_ACCEPT if accepted else EXIT_REJECT


def _format_state(state):
    if state is None:
        return "stuck"
    if isinstance(state, frozenset):
        return "{" + ", ".join(str(s) for s in sorted(state)) + "}"
    return str(state)


if __name__ == "__main__":
    sys.exit(main())
