"""Tree-walking evaluator for the Monkey language.

evaluate(node, env) recursively interprets an AST node against a scope chain and returns an Object. Two kinds of value
interrupt normal evaluation and are passed straight up by every composite node that produces them:

- Error: a runtime failure. Checked immediately after evaluating every operand, condition, callee, argument, statement
  and let/return value, and returned without evaluating anything further at that level.
- ReturnValue: the result of a `return`. Passed up through the same join points as an Error, so it is never bound,
  operated on or passed as an argument, and unwrapped at the function-call boundary (or by the top-level Program) so
  it is never observed outside the evaluator.

Errors are values, not Python exceptions. The only Python exception that can escape is RecursionError, for programs
nested or recursing deeper than the host stack allows.
"""

import logging
import operator

from monkey.runtime.builtins import BUILTINS
from monkey.runtime.environment import Environment
from monkey.runtime.object import (Boolean, Builtin, Error, Function, Integer, NULL, ObjectType, ReturnValue, String,
                                   is_interrupt, is_truthy)
from monkey.syntax import ast


logger = logging.getLogger(__name__)

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

INTEGER_ARITHMETIC = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
}

INTEGER_COMPARISON = {
    "<": operator.lt,
    ">": operator.gt,
    "==": operator.eq,
    "!=": operator.ne,
}


class Evaluator:
    """Evaluates AST nodes. Holds no state between calls except the read-only builtin table; all program state lives in
    the Environment passed to evaluate.
    """

    def __init__(self, builtins=BUILTINS):
        self.builtins = builtins

    def evaluate(self, node, env):
        """Returns the Object that node evaluates to in env."""
        match node:
            # statements
            case ast.Program(statements=statements):
                return self._evaluate_program(statements, env)
            case ast.BlockStatement(statements=statements):
                return self._evaluate_block(statements, env)
            case ast.ExpressionStatement(expression=expression):
                return self.evaluate(expression, env)
            case ast.LetStatement(name=name, value=value_expr):
                value = self.evaluate(value_expr, env)
                if is_interrupt(value):
                    return value
                return env.set(name.value, value)
            case ast.ReturnStatement(return_value=None):
                return ReturnValue(NULL)
            case ast.ReturnStatement(return_value=value_expr):
                value = self.evaluate(value_expr, env)
                if is_interrupt(value):
                    return value
                return ReturnValue(value)

            # literals
            case ast.IntegerLiteral(value=value):
                return Integer(value)
            case ast.StringLiteral(value=value):
                return String(value)
            case ast.BooleanLiteral(value=value):
                return Boolean(value)

            # expressions
            case ast.Identifier(value=name):
                return self._evaluate_identifier(name, env)
            case ast.PrefixExpression(operator=op, right=right_expr):
                right = self.evaluate(right_expr, env)
                if is_interrupt(right):
                    return right
                return evaluate_prefix(op, right)
            case ast.InfixExpression(left=left_expr, operator=op, right=right_expr):
                left = self.evaluate(left_expr, env)
                if is_interrupt(left):
                    return left
                right = self.evaluate(right_expr, env)
                if is_interrupt(right):
                    return right
                return evaluate_infix(op, left, right)
            case ast.IfExpression():
                return self._evaluate_if(node, env)
            case ast.FunctionLiteral(parameters=parameters, body=body):
                logger.debug("closure created: fn(%s) capturing %r", ", ".join(p.value for p in parameters), env)
                return Function(parameters, body, env)
            case ast.CallExpression(function=function_expr, arguments=argument_exprs):
                return self._evaluate_call(function_expr, argument_exprs, env)

            case _:
                raise TypeError(f"cannot evaluate {type(node).__name__}")

    def _evaluate_program(self, statements, env):
        result = NULL
        for stmt in statements:
            result = self.evaluate(stmt, env)
            match result:
                case ReturnValue(value=value):
                    return value
                case Error():
                    return result
        return result

    def _evaluate_block(self, statements, env):
        """Like _evaluate_program, but leaves ReturnValue wrapped so it keeps unwinding to the function boundary."""
        result = NULL
        for stmt in statements:
            result = self.evaluate(stmt, env)
            if is_interrupt(result):
                return result
        return result

    def _evaluate_identifier(self, name, env):
        value = env.get(name)
        if value is not None:
            return value

        builtin = self.builtins.get(name)
        if builtin is not None:
            return builtin

        return Error(f"identifier not found: {name}")

    def _evaluate_if(self, node, env):
        condition = self.evaluate(node.condition, env)
        if is_interrupt(condition):
            return condition

        if is_truthy(condition):
            return self.evaluate(node.consequence, env)
        if node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return NULL

    def _evaluate_call(self, function_expr, argument_exprs, env):
        function = self.evaluate(function_expr, env)
        if is_interrupt(function):
            return function

        if not isinstance(function, (Function, Builtin)):
            return Error(f"not a function: {function.type}")

        args = []
        for argument_expr in argument_exprs:
            arg = self.evaluate(argument_expr, env)
            if is_interrupt(arg):
                return arg
            args.append(arg)

        return self.apply_function(function, args)

    def apply_function(self, function, args):
        """Calls a Function or Builtin with already-evaluated args."""
        if isinstance(function, Builtin):
            return function.fn(args)

        logger.debug("applying fn(%s) to %d argument(s)", ", ".join(p.value for p in function.parameters), len(args))

        # missing arguments stay unbound and extra arguments are dropped
        call_env = Environment.new_enclosed(function.env)
        for param, arg in zip(function.parameters, args):
            call_env.set(param.value, arg)

        result = self.evaluate(function.body, call_env)
        if isinstance(result, ReturnValue):
            return result.value
        return result


def evaluate_prefix(op, right):
    match op, right:
        case "!", _:
            return Boolean(not is_truthy(right))
        case "-", Integer(value=value):
            return _checked_integer(-value, f"-{value}")
        case _:
            return Error(f"unknown operator: {op}{right.type}")


def evaluate_infix(op, left, right):
    match left, right:
        case Integer(), Integer():
            return evaluate_integer_infix(op, left.value, right.value)
        case String(), String() if op == "+":
            return String(left.value + right.value)
        case _ if left.type is not right.type:
            return Error(f"type mismatch: {left.type} {op} {right.type}")
        case Boolean(), Boolean() if op == "==":
            return Boolean(left.value == right.value)
        case Boolean(), Boolean() if op == "!=":
            return Boolean(left.value != right.value)
        case _:
            return Error(f"unknown operator: {left.type} {op} {right.type}")


def evaluate_integer_infix(op, left, right):
    """Signed 64-bit integer arithmetic: division truncates toward zero, results outside the 64-bit range are Errors."""
    if op in INTEGER_COMPARISON:
        return Boolean(INTEGER_COMPARISON[op](left, right))

    if op in INTEGER_ARITHMETIC:
        return _checked_integer(INTEGER_ARITHMETIC[op](left, right), f"{left} {op} {right}")

    if op == "/":
        if right == 0:
            return Error("division by zero")
        quotient = abs(left) // abs(right)
        if (left < 0) != (right < 0):
            quotient = -quotient
        return _checked_integer(quotient, f"{left} {op} {right}")

    return Error(f"unknown operator: {ObjectType.INTEGER} {op} {ObjectType.INTEGER}")


def _checked_integer(value, expr):
    if not INT64_MIN <= value <= INT64_MAX:
        return Error(f"integer overflow: {expr}")
    return Integer(value)


_default_evaluator = Evaluator()


def evaluate(node, env):
    """Evaluates node in env with the standard builtin table."""
    return _default_evaluator.evaluate(node, env)
