import pytest
from forth.forth_datatypes import (
    Token, Words, wrap_value, VALUE_MIN, VALUE_MAX,
    ForthError, DivisionByZero, StackUnderflow, UnknownWord, InvalidWord,
)

# --- Value range ---

@pytest.mark.parametrize(
    'value,         expected', [
    (0,             0),
    (-1,            -1),
    (VALUE_MAX,     VALUE_MAX),
    (VALUE_MIN,     VALUE_MIN),
    (VALUE_MAX + 1, VALUE_MIN),
    (VALUE_MIN - 1, VALUE_MAX),
    (2**32,         0),
    (2**32 + 5,     5),
])
def test_wrap_value(value, expected):
    assert wrap_value(value) == expected

# --- Token ---

def test_token_word_is_case_folded():
    tok = Token("DuP", 3, 1, 4)
    assert tok.word == "dup"
    assert tok.text == "DuP"

def test_token_loc():
    tok = Token("swap", 10, 2, 5)
    assert tok.loc() == {'line': 2, 'col': 5, 'text': 'swap'}

def test_token_is_frozen():
    tok = Token("1", 0, 1, 1)
    with pytest.raises(AttributeError):
        tok.text = "2"

# --- Errors ---

@pytest.mark.parametrize("cls", [DivisionByZero, StackUnderflow, UnknownWord, InvalidWord])
def test_error_hierarchy(cls):
    assert issubclass(cls, ForthError)
    err = cls("boom")
    assert err.kind == cls.__name__
    assert err.token is None
    assert str(err) == "boom"

def test_stack_underflow_carries_depths():
    tok = Token("+", 2, 1, 3)
    err = StackUnderflow("needs more", tok, needed=2, depth=1)
    assert err.token is tok
    assert (err.needed, err.depth) == (2, 1)

# --- Words ---

def test_words_are_case_insensitive():
    words = Words()
    words["Square"] = ("dup", "*")
    assert "square" in words
    assert "SQUARE" in words
    assert words["sQuArE"] == ["dup", "*"]
    assert list(words) == ["square"]

def test_words_delete_and_missing():
    words = Words(double=["2", "*"])
    del words["DOUBLE"]
    assert "double" not in words
    with pytest.raises(KeyError):
        _ = words["double"]

def test_words_reject_non_str_keys():
    words = Words()
    with pytest.raises(TypeError):
        words[1] = ["dup"]
    assert 1 not in words

def test_words_reject_str_bodies():
    words = Words()
    with pytest.raises(TypeError):
        words["sq"] = "dup *"
    assert "sq" not in words
    words["sq"] = "dup *".split()
    assert words["sq"] == ["dup", "*"]
