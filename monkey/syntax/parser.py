"""Parser for the Monkey language: recursive descent for statements, precedence climbing (Pratt parsing) for
expressions.

```
<program>    ::= <statement>*
<statement>  ::= "let" <ident> "=" <expr> [";"]
               | "return" [<expr>] [";"]
               | <expr> [";"]
<block>      ::= "{" <statement>* "}"
<expr>       ::= <prefix-op> <expr> | <expr> <infix-op> <expr> | <expr> "(" [<expr> ("," <expr>)*] ")"
               | "(" <expr> ")" | "if" "(" <expr> ")" <block> ["else" <block>]
               | "fn" "(" [<ident> ("," <ident>)*] ")" <block>
               | <ident> | <int> | <string> | "true" | "false"
```

Binding power, lowest to highest: `== !=`, `< >`, `+ -`, `* /`, prefix `! -`, call `(`.

The parser never raises on bad input. Each failed production records a message in `errors` and yields None, and
parse_program carries on with the next statement. Callers must not evaluate a program whose parser has errors.
"""

import enum
import logging

from monkey.syntax import ast
from monkey.syntax.lexer import Lexer
from monkey.syntax.token import TokenKind


logger = logging.getLogger(__name__)

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class Precedence(enum.IntEnum):
    LOWEST = 1
    EQUALS = 2       # ==
    LESSGREATER = 3  # > or <
    SUM = 4          # +
    PRODUCT = 5      # *
    PREFIX = 6       # -X or !X
    CALL = 7         # myFunction(X)


PRECEDENCES = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
}

# tokens after `return` that mean there is no return value
RETURN_TERMINATORS = (TokenKind.SEMICOLON, TokenKind.RBRACE, TokenKind.EOF)


class Parser:
    """Consumes a Lexer's token stream and builds an ast.Program. Keeps the current token, one token of lookahead, the
    accumulated error messages and the prefix/infix dispatch tables.
    """

    def __init__(self, lexer):
        self.lexer = lexer
        self.errors = []

        self.prefix_parse_fns = {
            TokenKind.IDENT: self.parse_identifier,
            TokenKind.INT: self.parse_integer_literal,
            TokenKind.STRING: self.parse_string_literal,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.TRUE: self.parse_boolean,
            TokenKind.FALSE: self.parse_boolean,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.IF: self.parse_if_expression,
            TokenKind.FUNCTION: self.parse_function_literal,
        }
        self.infix_parse_fns = {
            TokenKind.PLUS: self.parse_infix_expression,
            TokenKind.MINUS: self.parse_infix_expression,
            TokenKind.SLASH: self.parse_infix_expression,
            TokenKind.ASTERISK: self.parse_infix_expression,
            TokenKind.EQ: self.parse_infix_expression,
            TokenKind.NOT_EQ: self.parse_infix_expression,
            TokenKind.LT: self.parse_infix_expression,
            TokenKind.GT: self.parse_infix_expression,
            TokenKind.LPAREN: self.parse_call_expression,
        }

        self.cur_token = self.lexer.next_token()
        self.peek_token = self.lexer.next_token()

    def parse_program(self):
        """Parses statements until end of input. Always returns a Program, possibly partial: check self.errors."""
        statements = []
        while not self.cur_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        return ast.Program(tuple(statements))

    # -----------------------------------------------------------------------------------------------------------------
    # statements

    def parse_statement(self):
        if self.cur_token_is(TokenKind.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        token = self.cur_token

        if not self.expect_peek(TokenKind.IDENT):
            return None
        name = ast.Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TokenKind.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self._skip_semicolon()
        return ast.LetStatement(token, name, value)

    def parse_return_statement(self):
        token = self.cur_token

        if self.peek_token.kind in RETURN_TERMINATORS:
            self._skip_semicolon()
            return ast.ReturnStatement(token)

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self._skip_semicolon()
        return ast.ReturnStatement(token, value)

    def parse_expression_statement(self):
        token = self.cur_token

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        self._skip_semicolon()
        return ast.ExpressionStatement(token, expression)

    def parse_block_statement(self):
        """Parses statements up to the matching `}`. Assumes cur_token is the opening `{`."""
        token = self.cur_token
        statements = []

        self.next_token()
        while not self.cur_token_is(TokenKind.RBRACE) and not self.cur_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()

        if self.cur_token_is(TokenKind.EOF):
            self._error(f"expected next token to be {TokenKind.RBRACE}, got {TokenKind.EOF} instead")

        return ast.BlockStatement(token, tuple(statements))

    # -----------------------------------------------------------------------------------------------------------------
    # expressions

    def parse_expression(self, precedence):
        """Pratt loop: parse a prefix expression, then keep folding it into infix expressions while the next operator
        binds tighter than precedence.
        """
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self._error(f"no prefix parse function for {self.cur_token.kind} found")
            return None

        left = prefix()

        while left is not None and not self.peek_token_is(TokenKind.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self):
        return ast.Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self):
        literal = self.cur_token.literal
        try:
            value = int(literal.replace("_", ""))
            assert INT64_MIN <= value <= INT64_MAX
        except (AssertionError, ValueError):
            self._error(f"could not parse {literal} as integer")
            return None
        return ast.IntegerLiteral(self.cur_token, value)

    def parse_string_literal(self):
        return ast.StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self):
        return ast.BooleanLiteral(self.cur_token, self.cur_token_is(TokenKind.TRUE))

    def parse_prefix_expression(self):
        token = self.cur_token

        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None

        return ast.PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left):
        token = self.cur_token
        precedence = self.cur_precedence()

        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None

        return ast.InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self):
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)

        if expression is None or not self.expect_peek(TokenKind.RPAREN):
            return None
        return expression

    def parse_if_expression(self):
        token = self.cur_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None

        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None

        if not self.expect_peek(TokenKind.RPAREN) or not self.expect_peek(TokenKind.LBRACE):
            return None
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenKind.ELSE):
            self.next_token()
            if not self.expect_peek(TokenKind.LBRACE):
                return None
            alternative = self.parse_block_statement()

        return ast.IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self):
        token = self.cur_token

        if not self.expect_peek(TokenKind.LPAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None or not self.expect_peek(TokenKind.LBRACE):
            return None

        return ast.FunctionLiteral(token, parameters, self.parse_block_statement())

    def parse_function_parameters(self):
        """Parses `ident, ident, ...)` after the opening `(`. Returns a tuple of Identifiers, or None on error."""
        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return ()

        identifiers = []
        if not self.expect_peek(TokenKind.IDENT):
            return None
        identifiers.append(ast.Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            if not self.expect_peek(TokenKind.IDENT):
                return None
            identifiers.append(ast.Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return tuple(identifiers)

    def parse_call_expression(self, function):
        token = self.cur_token

        arguments = self.parse_call_arguments()
        if arguments is None:
            return None

        return ast.CallExpression(token, function, arguments)

    def parse_call_arguments(self):
        """Parses `expr, expr, ...)` after the opening `(`. Returns a tuple of expressions, or None on error."""
        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return ()

        self.next_token()
        arguments = [self.parse_expression(Precedence.LOWEST)]

        while arguments[-1] is not None and self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            self.next_token()
            arguments.append(self.parse_expression(Precedence.LOWEST))

        if arguments[-1] is None or not self.expect_peek(TokenKind.RPAREN):
            return None
        return tuple(arguments)

    # -----------------------------------------------------------------------------------------------------------------
    # token helpers

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind):
        return self.cur_token.kind is kind

    def peek_token_is(self, kind):
        return self.peek_token.kind is kind

    def expect_peek(self, kind):
        """Advances if the next token is of kind. Otherwise records an error and returns False without advancing."""
        if self.peek_token_is(kind):
            self.next_token()
            return True

        self._error(f"expected next token to be {kind}, got {self.peek_token.kind} instead")
        return False

    def peek_precedence(self):
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def cur_precedence(self):
        return PRECEDENCES.get(self.cur_token.kind, Precedence.LOWEST)

    def _skip_semicolon(self):
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()

    def _error(self, msg):
        logger.debug("parse error at %r: %s", self.cur_token.literal, msg)
        self.errors.append(msg)


def parse(source):
    """Convenience wrapper: returns (program, errors) for source."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
