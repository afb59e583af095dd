"""
Lexical analyzer for the Monkey language.

The parser only needs a pull-based token source (`next_token()`); this module
provides the concrete ones used by the CLI, the REPL and the tests.

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: A single token with type, literal text, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.
    TokenStream: Serves a pre-built sequence of tokens through `next_token()`.

Features:
    - Skips whitespace
    - Longest-match recognition of operators (`==` before `=`)
    - Recognizes identifiers, keywords and integer literals
    - Unknown characters become ILLEGAL tokens; the lexer never raises

Example:
    >>> lexer = Lexer(CharacterStream("let x = 5;"))
    >>> lexer.next_token()
    Token(LET, let)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - TokenStream
    - tokenize
"""

from collections.abc import Iterable
from typing import Any

from monkey.monkey_constants import (
    DIGITS,
    EOF,
    IDENT,
    ILLEGAL,
    INT,
    keywords,
    token_hashmap,
)


class CharacterStream:
    """
    Reads characters from a source string with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            Exception: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise Exception(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" if out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """A single lexical token.

    Tokens are value objects: two tokens are equal when type, literal and
    position all match.

    Attributes:
        type (str): The token type (e.g. 'IDENT', 'INT', '+', 'EOF').
        literal (str): The source text of the token.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: str, literal: str, line: int = 0, col: int = 0):
        self.type = type_
        self.literal = literal
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.literal})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.literal == other.literal
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.literal, self.line, self.col))


class Lexer:
    """Lexical analyzer for the Monkey language.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek() in " \t\r\n":
            self.advance()

    def match_operator(self) -> Token | None:
        """Attempts to match the longest operator or delimiter at the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        match_len = 0
        candidate = ""

        for i in range(2):  # longest operator is two characters
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate
                match_len = i + 1

        if max_token:
            for _ in range(match_len):
                self.advance()
            return Token(token_hashmap[max_token], max_token, line, col)

        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token; returns EOF indefinitely at end of input."""
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token(EOF, "", self.stream.line, self.stream.column)

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Identifier or keyword
        if ch.isalpha() or ch == "_":
            ident = ""
            while not self.stream.end_of_file() and (
                self.peek().isalnum() or self.peek() == "_"
            ):
                ident += self.advance()
            return Token(keywords.get(ident, IDENT), ident, line, col)

        # 2. Integer
        if ch in DIGITS:
            num = ""
            while not self.stream.end_of_file() and self.peek() in DIGITS:
                num += self.advance()
            return Token(INT, num, line, col)

        # 3. Operator or delimiter
        token = self.match_operator()
        if token:
            return token

        # 4. Unknown character
        return Token(ILLEGAL, self.advance(), line, col)


class TokenStream:
    """Serves an already-lexed sequence of tokens through `next_token()`.

    Once the sequence is exhausted an EOF token is returned on every call, so a
    stream that never contained EOF still terminates a parse.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = iter(tokens)
        self._eof = Token(EOF, "")

    def next_token(self) -> Token:
        tok = next(self._tokens, None)
        if tok is None:
            return self._eof
        if tok.type == EOF:
            self._eof = tok
        return tok


def tokenize(source: str) -> list[Token]:
    """Lexes `source` completely and returns its tokens, without the trailing EOF."""
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        if tok.type == EOF:
            break
        tokens.append(tok)
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "TokenStream", "tokenize"]
