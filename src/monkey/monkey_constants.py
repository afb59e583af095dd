"""
Token and precedence tables for the Monkey language front end.

Token types are plain strings. Symbolic operators use their own spelling as the
type name (e.g. "+", "=="), while literals, identifiers and keywords use upper
case names (e.g. "INT", "IDENT", "LET").

Exports:
    - token type names (ILLEGAL, EOF, IDENT, INT, ASSIGN, PLUS, ...)
    - keywords: reserved word → token type
    - token_hashmap: operator/delimiter spelling → token type
    - precedence levels LOWEST .. CALL and the `precedences` table
"""

ILLEGAL = "ILLEGAL"
EOF = "EOF"

# Identifiers and literals
IDENT = "IDENT"
INT = "INT"

# Operators
ASSIGN = "="
PLUS = "+"
MINUS = "-"
BANG = "!"
ASTERISK = "*"
SLASH = "/"
LT = "<"
GT = ">"
EQ = "=="
NOT_EQ = "!="

# Delimiters
COMMA = ","
SEMICOLON = ";"
LPAREN = "("
RPAREN = ")"
LBRACE = "{"
RBRACE = "}"

# Keywords
FUNCTION = "FUNCTION"
LET = "LET"
TRUE = "TRUE"
FALSE = "FALSE"
IF = "IF"
ELSE = "ELSE"
RETURN = "RETURN"

keywords: dict[str, str] = {
    "fn": FUNCTION,
    "let": LET,
    "true": TRUE,
    "false": FALSE,
    "if": IF,
    "else": ELSE,
    "return": RETURN,
}

token_hashmap: dict[str, str] = {
    op: op
    for op in (
        ASSIGN,
        PLUS,
        MINUS,
        BANG,
        ASTERISK,
        SLASH,
        LT,
        GT,
        EQ,
        NOT_EQ,
        COMMA,
        SEMICOLON,
        LPAREN,
        RPAREN,
        LBRACE,
        RBRACE,
    )
}

# Precedence levels, lowest to highest
LOWEST = 1
EQUALS = 2  # ==
LESSGREATER = 3  # > or <
SUM = 4  # +
PRODUCT = 5  # *
PREFIX = 6  # -X or !X
CALL = 7  # myFunction(X)

# Only the operators with a registered infix parser get a level above LOWEST.
precedences: dict[str, int] = {
    PLUS: SUM,
    ASTERISK: PRODUCT,
}

DIGITS = "0123456789"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
