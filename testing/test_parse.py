import pytest

from fsa_tools.automata import aut_parse
from fsa_tools.automata.errors import AutomatonSyntaxError, FSAException

@pytest.fixture
def brace_text():
    return '{"det", 2, 2, [[[1], []], [[], [1]]], [0], [1]}'

@pytest.fixture
def call_text():
    return 'Automaton("det", 2, 2, [[[1], []], [[], [1]]], [0], [1]);;'

@pytest.fixture
def expected_record():
    return {
        "type": "det",
        "states": 2,
        "alphabet": 2,
        "transitions": [[[1], []], [[], [1]]],
        "initial": [0],
        "final": [1],
    }

def test_parse_brace(brace_text, expected_record):
    record = aut_parse.parse_automaton(brace_text)
    assert record.pop("wrapper") == "brace"
    assert record == expected_record

def test_parse_call(call_text, expected_record):
    record = aut_parse.parse_automaton(call_text)
    assert record.pop("wrapper") == "call"
    assert record == expected_record

def test_call_without_semicolon(expected_record):
    record = aut_parse.parse_automaton(
        'Automaton("det", 2, 2, [[[1], []], [[], [1]]], [0], [1])'
    )
    record.pop("wrapper")
    assert record == expected_record

def test_whitespace_between_tokens(expected_record):
    text = ('\n  Automaton (\n"det" ,2,\n 2 , [ [ [1],[ ] ] ,\n'
            '[[],[ 1 ]]],[0] ,[ 1]\n) ; ;\n')
    record = aut_parse.parse_automaton(text)
    record.pop("wrapper")
    assert record == expected_record

def test_parse_letters():
    record = aut_parse.parse_automaton(
        '{"epsilon", 1, "@aZ", [[[0], [], [0, 0]]], [], []}'
    )
    assert record["type"] == "epsilon"
    assert record["alphabet"] == "@aZ"
    assert record["transitions"] == [[[0], [], [0, 0]]]
    assert record["initial"] == []
    assert record["final"] == []

def test_leading_zeros():
    record = aut_parse.parse_automaton(
        '{"nondet", 01, 1, [[[00]]], [0], [0]}'
    )
    assert record["states"] == 1
    assert record["transitions"] == [[[0]]]

@pytest.mark.parametrize("text", [
    '',
    '{}',
    '{"dfa", 2, 2, [[[1], []], [[], [1]]], [0], [1]}',
    '{"det" 2, 2, [[[1], []], [[], [1]]], [0], [1]}',
    '{"det", -2, 2, [[[1], []], [[], [1]]], [0], [1]}',
    '{"det", 0x2, 2, [[[1], []], [[], [1]]], [0], [1]}',
    '{"det", 2, "a1", [[[1], []], [[], [1]]], [0], [1]}',
    '{"det", 2, "", [[[1], []], [[], [1]]], [0], [1]}',
    '{"det", 2, 2, [], [0], [1]}',
    '{"det", 2, 2, [[], []], [0], [1]}',
    '{"det", 2, 2, [[[1], []], [[], [1]]], [0,], [1]}',
    '{"det", 2, 2, [[[1], []], [[], [1]]], [0], [1]',
    '{"det", 2, 2, [[[1], []], [[], [1]], [0], [1]}',
    '{"det", 2, 2, [[[1], []], [[], [1]]], [0], [1]};',
    'Automaton("det", 2, 2, [[[1], []], [[], [1]]], [0], [1]',
    'automaton("det", 2, 2, [[[1], []], [[], [1]]], [0], [1]);',
    '{"det", 2, 2, [[[1], []], [[], [1]]], [0], [1]} extra',
    '{"det",\t2, 2, [[[1], []], [[], [1]]], [0], [1]}',
])
def test_malformed(text):
    with pytest.raises(AutomatonSyntaxError):
        aut_parse.parse_automaton(text)

def test_line_continuation_rejected():
    text = '{"nondet", 12\\\n3, 1, [[[0]]], [0], [0]}'
    with pytest.raises(AutomatonSyntaxError):
        aut_parse.parse_automaton(text)

def test_newline_inside_token_rejected():
    with pytest.raises(AutomatonSyntaxError):
        aut_parse.parse_automaton('{"nondet", 1\n2, 1, [[[0]]], [0], [0]}')

def test_error_position():
    text = '{"det", 2, 2,\n  [[[1], []], [[], [1x]]], [0], [1]}'
    with pytest.raises(AutomatonSyntaxError) as excinfo:
        aut_parse.parse_automaton(text)

    err = excinfo.value
    assert err.line == 2
    assert err.column == 22
    assert err.offset == text.index("x")
    assert err.expected == "',' or ']'"
    assert "line 2, column 22" in str(err)

def test_error_expected_type():
    with pytest.raises(AutomatonSyntaxError) as excinfo:
        aut_parse.parse_automaton('{"maybe", 1, 1, [[[0]]], [0], [0]}')
    assert excinfo.value.expected == "TYPE"
    assert excinfo.value.column == 2

def test_error_at_end_of_input():
    with pytest.raises(AutomatonSyntaxError) as excinfo:
        aut_parse.parse_automaton('{"det", 1, 1, [[[0]]], [0], [0]')
    assert "end of input" in str(excinfo.value)

def test_syntax_error_is_fsa_exception():
    with pytest.raises(FSAException):
        aut_parse.parse_automaton("[")

def test_load_record_file(tmp_path, brace_text, expected_record):
    autfile = tmp_path / "test.aut"
    autfile.write_text(brace_text)
    record = aut_parse.load_record_file(str(autfile))
    record.pop("wrapper")
    assert record == expected_record

def test_load_invalid_utf8(tmp_path):
    autfile = tmp_path / "bad.aut"
    autfile.write_bytes(b'{"det", 1, 1,\n [[[0]]], [0], [0]}\xff')
    with pytest.raises(AutomatonSyntaxError) as excinfo:
        aut_parse.load_record_file(str(autfile))

    err = excinfo.value
    assert err.offset == 33
    assert err.line == 2
    assert err.column == 20
