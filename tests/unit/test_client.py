import pytest
from src.saucer_reader.client import StandardReadClient, no_case, is_symbol, is_number
from src.saucer_reader.tokens import Token, TokenTag, SourceInfo
from src.saucer_reader.diagnostics import ReadError

def _tok(tag, raw):
    return Token(tag, raw, SourceInfo(0, 0))

@pytest.mark.parametrize("src, expected", [
    ("wow", "wow"),
    ("HelloWorld", "hello world"),
    ("helloWorld", "hello world"),
    ("hello-world", "hello world"),
    ("hello_world", "hello world"),
    ("HTTPServer", "http server"),
    ("===", "==="),
    ("&&", "&&"),
    ("->", "->"),
])
def test_no_case(src, expected):
    assert no_case(src) == expected

@pytest.mark.parametrize("tag, raw, expected", [
    (TokenTag.SYMBOL, "+", True),
    (TokenTag.SYMBOL, "&&", True),
    (TokenTag.SYMBOL, "===", True),
    (TokenTag.SYMBOL, "->", True),
    (TokenTag.SYMBOL, "=", False),
    (TokenTag.SYMBOL, "plus", False),
    (TokenTag.STRING, "+", False),
    (TokenTag.NUMBER, "1", False),
])
def test_is_binary_selector(tag, raw, expected):
    assert StandardReadClient().is_binary_selector(_tok(tag, raw)) is expected

def test_parse_number():
    atom = StandardReadClient().parse_number(_tok(TokenTag.NUMBER, "12"))
    assert is_number(atom) and atom.raw == 12.0

def test_parse_number_rejects_garbage():
    with pytest.raises(ReadError):
        StandardReadClient().parse_number(_tok(TokenTag.NUMBER, "1x"))

def test_parse_symbol_words():
    atom = StandardReadClient().parse_symbol(_tok(TokenTag.SYMBOL, "eatFood"))
    assert is_symbol(atom)
    assert atom.words == ["eat", "food"]

def test_atoms_of_different_kinds_are_distinct():
    client = StandardReadClient()
    assert client.parse_symbol(_tok(TokenTag.SYMBOL, "a")) != client.parse_string(_tok(TokenTag.STRING, "a"))
