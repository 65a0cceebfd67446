import numpy as np
import pytest

from fsa_tools.automata import builder, execution
from fsa_tools.automata.execution import Executor
from fsa_tools.automata.errors import AutomatonRuntimeError

@pytest.fixture
def scenario_a():
    # 0 --0--> 1, 1 --1--> 1
    return builder.from_string(
        '{"det", 2, 2, [[[1], []], [[], [1]]], [0], [1]}'
    )

@pytest.fixture
def scenario_b():
    return builder.from_string(
        '{"nondet", 3, 1, [[[1, 2]], [[]], [[]]], [0], [2]}'
    )

@pytest.fixture
def scenario_c():
    return builder.from_string(
        '{"epsilon", 2, 1, [[[1]], [[]]], [0], [1]}'
    )

@pytest.fixture
def a_star_b_star():
    return builder.load_builtin("a_star_b_star.aut")

def test_scenario_a(scenario_a):
    assert execution.accepts(scenario_a, [0, 1])
    assert execution.accepts(scenario_a, [0, 1, 1, 1])
    assert not execution.accepts(scenario_a, [1])
    assert not execution.accepts(scenario_a, [])
    assert not execution.accepts(scenario_a, [0, 0])

def test_scenario_b(scenario_b):
    assert execution.accepts(scenario_b, [0])
    assert not execution.accepts(scenario_b, [])
    assert not execution.accepts(scenario_b, [0, 0])

def test_scenario_c(scenario_c):
    assert execution.accepts(scenario_c, [])

def test_epsilon_letter_is_not_input(scenario_c):
    assert not execution.accepts(scenario_c, [0])

def test_out_of_alphabet_rejects(scenario_a, scenario_b):
    assert not execution.accepts(scenario_a, [0, 2])
    assert not execution.accepts(scenario_a, [-1])
    assert not execution.accepts(scenario_b, [7])

def test_automaton_methods(scenario_a):
    assert scenario_a.accepts([0, 1])
    assert list(scenario_a.run([0, 1])) == [0, 1, 1]
    assert scenario_a.executor is scenario_a.executor

def test_deterministic_trace(scenario_a):
    assert list(execution.run(scenario_a, [])) == [0]
    assert list(execution.run(scenario_a, [0, 1, 1])) == [0, 1, 1, 1]
    # stuck after the first letter, and stays stuck
    assert list(execution.run(scenario_a, [1, 0, 1])) == [0, None, None, None]
    assert list(execution.run(scenario_a, [0, 5, 1])) == [0, 1, None, None]

def test_nondeterministic_trace(scenario_b):
    assert list(execution.run(scenario_b, [0, 0, 0])) == [
        frozenset([0]), frozenset([1, 2]), frozenset(), frozenset()
    ]

def test_epsilon_trace(a_star_b_star):
    assert list(execution.run(a_star_b_star, "aab")) == [
        frozenset([0, 1]), frozenset([0, 1]), frozenset([0, 1]),
        frozenset([1])
    ]

def test_emptiness_is_permanent():
    # state 1 has no edges; state 2 accepts everything
    aut = builder.from_string(
        '{"nondet", 3, 2, [[[1], [2]], [[], []], [[2], [2]]], [0], [1, 2]}'
    )
    trace = list(execution.run(aut, [0, 1, 0, 1, 1]))
    first_empty = trace.index(frozenset())
    assert first_empty == 2
    assert all(len(states) == 0 for states in trace[first_empty:])
    assert not execution.accepts(aut, [0, 1, 0, 1, 1])
    assert execution.accepts(aut, [1, 0, 1])

def test_a_star_b_star(a_star_b_star):
    assert a_star_b_star.accepts("")
    assert a_star_b_star.accepts("aab")
    assert a_star_b_star.accepts("bbb")
    assert a_star_b_star.accepts([1, 2, 2])
    assert not a_star_b_star.accepts("ba")
    assert not a_star_b_star.accepts("abab")
    assert not a_star_b_star.accepts("@")
    assert not a_star_b_star.accepts("ac")

def test_contains_aba():
    aut = builder.load_builtin("contains_aba.aut")
    assert aut.accepts("aba")
    assert aut.accepts("babab")
    assert aut.accepts("bbabaa")
    assert not aut.accepts("abba")
    assert not aut.accepts("")

def test_binary_mult3():
    aut = builder.load_builtin("binary_mult3.aut")
    for n in range(40):
        bits = [int(b) for b in bin(n)[2:]]
        assert aut.accepts(bits) == (n % 3 == 0)

def test_no_initial_states():
    det = builder.from_string('{"det", 1, 1, [[[0]]], [], [0]}')
    nondet = builder.from_string('{"nondet", 1, 1, [[[0]]], [], [0]}')
    assert not det.accepts([])
    assert not nondet.accepts([0])
    assert list(det.run([0])) == [None, None]

def test_multiple_initial_states():
    aut = builder.from_string(
        '{"nondet", 3, 1, [[[]], [[2]], [[]]], [0, 1], [2]}'
    )
    assert aut.accepts([0])

def test_epsilon_closure_after_each_letter():
    # 0 -a-> 1, 1 -eps-> 2 -eps-> 3, 3 -b-> 4
    aut = builder.from_string(
        '{"epsilon", 5, "@ab", [[[], [1], []], [[2], [], []], [[3], [], []], '
        '[[], [], [4]], [[], [], []]], [0], [4]}'
    )
    assert aut.accepts("ab")
    assert list(aut.run("a")) == [frozenset([0]), frozenset([1, 2, 3])]

def test_string_word_needs_named_alphabet(scenario_a):
    with pytest.raises(AutomatonRuntimeError):
        scenario_a.accepts("01")

def test_unreadable_symbol(scenario_a, a_star_b_star):
    with pytest.raises(AutomatonRuntimeError):
        scenario_a.accepts([0, 1.5])
    with pytest.raises(AutomatonRuntimeError):
        scenario_a.accepts([None])
    with pytest.raises(AutomatonRuntimeError):
        a_star_b_star.accepts(["ab"])

def test_numpy_word(scenario_a):
    assert scenario_a.accepts(np.array([0, 1, 1]))

def test_executor_data(scenario_a, scenario_b):
    det = Executor(scenario_a)
    assert det.table.tolist() == [[1, -1], [-1, 1]]

    nondet = Executor(scenario_b)
    assert nondet.start_bitset.tolist() == [True, False, False]
    assert nondet.final_mask.tolist() == [False, False, True]
    assert nondet.step_matrices[0].shape == (3, 3)

def test_accepts_many(a_star_b_star):
    words = ["", "ab", "ba", "aaabbb", "bab", "b"] * 10
    expected = [a_star_b_star.accepts(word) for word in words]
    assert execution.accepts_many(a_star_b_star, words,
                                  max_workers=4) == expected

@pytest.mark.parametrize("word", [[1, 1.5], [1, None], [1, "ab"]])
def test_unreadable_symbol_after_stuck(scenario_a, word):
    # reading 1 from the start state already gets stuck
    with pytest.raises(AutomatonRuntimeError):
        scenario_a.accepts(word)
    with pytest.raises(AutomatonRuntimeError):
        list(scenario_a.run(word))

def test_unreadable_word_without_initial_state():
    det = builder.from_string('{"det", 1, 1, [[[0]]], [], [0]}')
    with pytest.raises(AutomatonRuntimeError):
        det.accepts("a")
    with pytest.raises(AutomatonRuntimeError):
        det.run("a")
