import pytest
from hypothesis import given
from hypothesis import strategies as st

from monkey.monkey_lexer import CharacterStream, Lexer, Token, TokenStream, tokenize


def test_single_char_tokens() -> None:
    code = "= + - ! * / < > , ; ( ) { }"
    expected = ["=", "+", "-", "!", "*", "/", "<", ">", ",", ";", "(", ")", "{", "}"]
    lexer = Lexer(CharacterStream(code))
    types = [lexer.next_token().type for _ in expected]
    assert types == expected


def test_two_char_operators_win_over_prefixes() -> None:
    toks = tokenize("a == b != c = d ! e")
    assert [t.type for t in toks] == [
        "IDENT",
        "==",
        "IDENT",
        "!=",
        "IDENT",
        "=",
        "IDENT",
        "!",
        "IDENT",
    ]


def test_integer_token() -> None:
    tok = Lexer(CharacterStream("123")).next_token()
    assert tok.type == "INT"
    assert tok.literal == "123"


def test_identifier_token() -> None:
    tok = Lexer(CharacterStream("my_var2")).next_token()
    assert tok.type == "IDENT"
    assert tok.literal == "my_var2"


@pytest.mark.parametrize(
    "word,expected",
    [
        ("fn", "FUNCTION"),
        ("let", "LET"),
        ("true", "TRUE"),
        ("false", "FALSE"),
        ("if", "IF"),
        ("else", "ELSE"),
        ("return", "RETURN"),
    ],
)
def test_keywords(word: str, expected: str) -> None:
    tok = Lexer(CharacterStream(word)).next_token()
    assert tok.type == expected
    assert tok.literal == word


def test_let_statement_tokens_with_positions() -> None:
    toks = tokenize("let x = 5;\nx")
    assert toks == [
        Token("LET", "let", 1, 1),
        Token("IDENT", "x", 1, 5),
        Token("=", "=", 1, 7),
        Token("INT", "5", 1, 9),
        Token(";", ";", 1, 10),
        Token("IDENT", "x", 2, 1),
    ]


def test_unrecognized_character_returns_illegal() -> None:
    tok = Lexer(CharacterStream("~")).next_token()
    assert tok.type == "ILLEGAL"
    assert tok.literal == "~"


def test_eof_is_returned_forever() -> None:
    lexer = Lexer(CharacterStream("x"))
    assert lexer.next_token().type == "IDENT"
    for _ in range(3):
        tok = lexer.next_token()
        assert tok.type == "EOF"
        assert tok.literal == ""


def test_peek_beyond_end_returns_empty() -> None:
    stream = CharacterStream("ab")
    stream.next()
    stream.next()
    assert stream.peek() == ""
    assert stream.peek(5) == ""
    with pytest.raises(Exception, match="CharacterStreamError"):
        stream.next()


def test_token_equality_and_hash() -> None:
    a = Token("INT", "5", 1, 1)
    assert a == Token("INT", "5", 1, 1)
    assert a != Token("INT", "5", 1, 2)
    assert a != "INT"
    assert len({a, Token("INT", "5", 1, 1)}) == 1
    assert repr(a) == "Token(INT, 5)"


def test_token_stream_pads_with_eof() -> None:
    stream = TokenStream([Token("INT", "1")])
    assert stream.next_token() == Token("INT", "1")
    assert stream.next_token().type == "EOF"
    assert stream.next_token().type == "EOF"


def test_token_stream_repeats_supplied_eof() -> None:
    eof = Token("EOF", "", 3, 4)
    stream = TokenStream([eof])
    assert stream.next_token() is eof
    assert stream.next_token() is eof


@given(st.text())
def test_lexer_never_raises(text: str) -> None:
    lexer = Lexer(CharacterStream(text))
    for _ in range(len(text) + 1):
        if lexer.next_token().type == "EOF":
            break
    else:
        raise AssertionError(f"Lexer did not reach EOF on {text!r}")


def test_only_ascii_digits_form_integers() -> None:
    toks = tokenize("12٣ ５")
    assert [(t.type, t.literal) for t in toks] == [
        ("INT", "12"),
        ("ILLEGAL", "٣"),
        ("ILLEGAL", "５"),
    ]
