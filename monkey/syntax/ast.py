"""Abstract syntax tree for the Monkey language.

Nodes are immutable once the parser builds them. Every node keeps the token it originated from, for diagnostics and for
printing. Printing an expression reproduces a fully parenthesized form of the precedence the parser actually applied,
so `str(node)` doubles as a correctness oracle for the parser:

```
-a * b                 ->  ((-a) * b)
a + b * c + d / e - f  ->  (((a + (b * c)) + (d / e)) - f)
a + add(b * c) + d     ->  ((a + add((b * c))) + d)
```

Statements:  Program, LetStatement, ReturnStatement, ExpressionStatement, BlockStatement
Expressions: Identifier, IntegerLiteral, StringLiteral, BooleanLiteral, PrefixExpression, InfixExpression,
             IfExpression, FunctionLiteral, CallExpression
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from monkey.syntax.token import Token


class Node:
    """Superclass of every AST node."""
    token: Token

    def token_literal(self):
        """Literal text of the token this node originated from."""
        return self.token.literal


class Statement(Node):
    """A node evaluated for its effect or its value inside a sequence of statements."""


class Expression(Node):
    """A node that produces a value."""


@dataclass(frozen=True)
class Program:
    """Root node: the ordered statements of one input chunk."""
    statements: Tuple[Statement, ...] = ()

    def token_literal(self):
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self):
        return "".join(str(stmt) for stmt in self.statements)


# ---------------------------------------------------------------------------------------------------------------------
# expressions

@dataclass(frozen=True)
class Identifier(Expression):
    token: Token
    value: str

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    token: Token
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class StringLiteral(Expression):
    token: Token
    value: str

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    token: Token
    value: bool

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class PrefixExpression(Expression):
    """`<operator><right>`, e.g. `!ok` or `-5`."""
    token: Token
    operator: str
    right: Expression

    def __str__(self):
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    """`<left> <operator> <right>`. token is the operator token."""
    token: Token
    left: Expression
    operator: str
    right: Expression

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class BlockStatement(Statement):
    """Brace-delimited statement sequence. token is the opening `{`."""
    token: Token
    statements: Tuple[Statement, ...] = ()

    def __str__(self):
        return "".join(str(stmt) for stmt in self.statements)


@dataclass(frozen=True)
class IfExpression(Expression):
    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self):
        result = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            result += f"else {self.alternative}"
        return result


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    """`fn(<parameters>) { <body> }`. The body is shared, read-only, with every Function value made from it."""
    token: Token
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    """`<function>(<arguments>)`. token is the `(` that turned function into a call."""
    token: Token
    function: Expression
    arguments: Tuple[Expression, ...] = ()

    def __str__(self):
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.function}({args})"


# ---------------------------------------------------------------------------------------------------------------------
# statements

@dataclass(frozen=True)
class LetStatement(Statement):
    token: Token
    name: Identifier
    value: Expression

    def __str__(self):
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    token: Token
    return_value: Optional[Expression] = None

    def __str__(self):
        if self.return_value is None:
            return f"{self.token_literal()};"
        return f"{self.token_literal()} {self.return_value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    """A bare expression used as a statement; token is the expression's first token."""
    token: Token
    expression: Expression

    def __str__(self):
        return str(self.expression)
