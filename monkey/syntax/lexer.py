"""Lexical analysis for the Monkey language. The lexer pulls one token at a time from raw source text and never fails:
characters it does not recognize become ILLEGAL tokens and the decision to reject them is left to the parser.

Lexeme classes:

```
<ident>   ::= (<letter> | "_") (<letter> | "_" | <digit>)*   ; keywords are identifiers found in KEYWORDS
<int>     ::= <digit> (<digit> | "_")*                        ; "_" is a digit separator, stripped by the parser
<string>  ::= '"' <char>* '"'                                 ; no escapes; unterminated strings run to end of input
<op>      ::= "==" | "!=" | "=" | "!" | "+" | "-" | "*" | "/" | "<" | ">"
<delim>   ::= "," | ";" | "(" | ")" | "{" | "}"
```
"""

from monkey.syntax.token import Token, TokenKind, lookup_ident


SINGLE_CHARS = {
    "=": TokenKind.ASSIGN,
    "!": TokenKind.BANG,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}

DOUBLE_CHARS = {
    "==": TokenKind.EQ,
    "!=": TokenKind.NOT_EQ,
}

EOF_CHAR = ""
WHITESPACE = (" ", "\t", "\n", "\r", "\f", "\v")


def is_letter(char):
    return char.isascii() and (char.isalpha() or char == "_")


def is_digit(char):
    return char.isascii() and char.isdigit()


class Lexer:
    """Pull-based tokenizer over a source string."""

    def __init__(self, source):
        self.source = source
        self._pos = 0

    def next_token(self):
        """Returns the next Token and advances past it. Once input is exhausted, every call returns an EOF token."""
        self._skip_whitespace()
        char = self._current_char()

        if char == EOF_CHAR:
            return Token(TokenKind.EOF, "")

        if char + self._peek_char() in DOUBLE_CHARS:
            literal = char + self._peek_char()
            self._advance(2)
            return Token(DOUBLE_CHARS[literal], literal)

        if char in SINGLE_CHARS:
            self._advance()
            return Token(SINGLE_CHARS[char], char)

        if char == "\"":
            return Token(TokenKind.STRING, self._read_string())

        if is_letter(char):
            literal = self._read_while(lambda c: is_letter(c) or is_digit(c))
            return Token(lookup_ident(literal), literal)

        if is_digit(char):
            return Token(TokenKind.INT, self._read_while(lambda c: is_digit(c) or c == "_"))

        self._advance()
        return Token(TokenKind.ILLEGAL, char)

    def __iter__(self):
        """Yields tokens up to and including the first EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return

    def _read_string(self):
        """Reads a string literal starting at its opening quote. Returns the text between the quotes."""
        self._advance()
        start = self._pos
        while self._current_char() not in ("\"", EOF_CHAR):
            self._advance()

        literal = self.source[start:self._pos]
        self._advance()  # closing quote (no-op at end of input)
        return literal

    def _read_while(self, predicate):
        start = self._pos
        while self._current_char() != EOF_CHAR and predicate(self._current_char()):
            self._advance()
        return self.source[start:self._pos]

    def _skip_whitespace(self):
        while self._current_char() in WHITESPACE:
            self._advance()

    def _advance(self, n=1):
        self._pos = min(self._pos + n, len(self.source))

    def _current_char(self):
        if self._pos < len(self.source):
            return self.source[self._pos]
        return EOF_CHAR

    def _peek_char(self):
        if self._pos + 1 < len(self.source):
            return self.source[self._pos + 1]
        return EOF_CHAR
