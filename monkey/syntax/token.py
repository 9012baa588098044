"""Token model for the Monkey language. Every lexeme the lexer produces is a Token: a kind tag plus the exact source text
it was read from.
"""

import enum
from dataclasses import dataclass


class TokenKind(enum.Enum):
    """Tags for every lexeme class. Values are the canonical source text where one exists."""
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # identifiers + literals
    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"

    # operators
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

    # delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # keywords
    FUNCTION = "fn"
    LET = "let"
    TRUE = "true"
    FALSE = "false"
    IF = "if"
    ELSE = "else"
    RETURN = "return"

    def __str__(self):
        return self.name


KEYWORDS = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}


@dataclass(frozen=True)
class Token:
    """A single lexeme: kind tag and literal source text."""
    kind: TokenKind
    literal: str

    def __str__(self):
        return f"Type:{self.kind}, Literal:{self.literal}"


def lookup_ident(ident):
    """Returns the keyword kind for ident, or IDENT if ident is not a keyword."""
    return KEYWORDS.get(ident, TokenKind.IDENT)
