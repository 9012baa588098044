import unittest

from monkey.syntax import ast
from monkey.syntax.lexer import Lexer
from monkey.syntax.parser import Parser, parse


def parse_ok(test_case, source):
    """Parses source, failing test_case if the parser recorded errors."""
    program, errors = parse(source)
    test_case.assertEqual([], errors, source)
    return program


class ParserStatementTestCase(unittest.TestCase):

    def test_let_statements(self):
        cases = {
            "let x = 5;": ("x", "5"),
            "let y = true;": ("y", "true"),
            "let foobar = y;": ("foobar", "y"),
            "let z = 1 + 2 * 3": ("z", "(1 + (2 * 3))"),
        }
        for case, (name, value) in cases.items():
            program = parse_ok(self, case)
            self.assertEqual(1, len(program.statements), case)

            stmt = program.statements[0]
            self.assertIsInstance(stmt, ast.LetStatement, case)
            self.assertEqual("let", stmt.token_literal(), case)
            self.assertEqual(name, stmt.name.value, case)
            self.assertEqual(name, stmt.name.token_literal(), case)
            self.assertEqual(value, str(stmt.value), case)

    def test_return_statements(self):
        cases = {
            "return 5;": "5",
            "return true;": "true",
            "return foobar;": "foobar",
            "return a + b": "(a + b)",
        }
        for case, value in cases.items():
            program = parse_ok(self, case)
            self.assertEqual(1, len(program.statements), case)

            stmt = program.statements[0]
            self.assertIsInstance(stmt, ast.ReturnStatement, case)
            self.assertEqual("return", stmt.token_literal(), case)
            self.assertEqual(value, str(stmt.return_value), case)

    def test_bare_return(self):
        for case in ["return;", "return", "fn() { return }"]:
            program = parse_ok(self, case)
            self.assertEqual(1, len(program.statements), case)

        stmt = parse_ok(self, "return;").statements[0]
        self.assertIsNone(stmt.return_value)

        body = parse_ok(self, "fn() { return }").statements[0].expression.body
        self.assertIsNone(body.statements[0].return_value)

    def test_statement_sequence(self):
        program = parse_ok(self, "let a = 1; a; return a;")
        self.assertEqual(
            [ast.LetStatement, ast.ExpressionStatement, ast.ReturnStatement],
            [type(stmt) for stmt in program.statements]
        )
        self.assertEqual("let a = 1;areturn a;", str(program))

    def test_empty_program(self):
        program = parse_ok(self, "")
        self.assertEqual((), program.statements)
        self.assertEqual("", program.token_literal())


class ParserExpressionTestCase(unittest.TestCase):

    def parse_expression(self, source):
        program = parse_ok(self, source)
        self.assertEqual(1, len(program.statements), source)
        self.assertIsInstance(program.statements[0], ast.ExpressionStatement, source)
        return program.statements[0].expression

    def test_identifier(self):
        expr = self.parse_expression("foobar;")
        self.assertIsInstance(expr, ast.Identifier)
        self.assertEqual("foobar", expr.value)
        self.assertEqual("foobar", expr.token_literal())

    def test_integer_literal(self):
        cases = {"5;": 5, "0": 0, "1_000": 1000, "9223372036854775807": 2 ** 63 - 1}
        for case, expected in cases.items():
            expr = self.parse_expression(case)
            self.assertIsInstance(expr, ast.IntegerLiteral, case)
            self.assertEqual(expected, expr.value, case)

    def test_string_literal(self):
        expr = self.parse_expression("\"hello world\";")
        self.assertIsInstance(expr, ast.StringLiteral)
        self.assertEqual("hello world", expr.value)

    def test_boolean(self):
        cases = {"true;": True, "false;": False}
        for case, expected in cases.items():
            expr = self.parse_expression(case)
            self.assertIsInstance(expr, ast.BooleanLiteral, case)
            self.assertIs(expected, expr.value, case)

    def test_prefix_expressions(self):
        cases = {
            "!5;": ("!", "5"),
            "-15;": ("-", "15"),
            "!true;": ("!", "true"),
            "-a": ("-", "a"),
        }
        for case, (op, right) in cases.items():
            expr = self.parse_expression(case)
            self.assertIsInstance(expr, ast.PrefixExpression, case)
            self.assertEqual(op, expr.operator, case)
            self.assertEqual(right, str(expr.right), case)

    def test_infix_expressions(self):
        for op in ["+", "-", "*", "/", ">", "<", "==", "!="]:
            case = f"5 {op} 6;"
            expr = self.parse_expression(case)
            self.assertIsInstance(expr, ast.InfixExpression, case)
            self.assertEqual(op, expr.operator, case)
            self.assertEqual(5, expr.left.value, case)
            self.assertEqual(6, expr.right.value, case)

    def test_operator_precedence(self):
        cases = {
            "-a * b": "((-a) * b)",
            "!-a": "(!(-a))",
            "a + b + c": "((a + b) + c)",
            "a + b - c": "((a + b) - c)",
            "a * b * c": "((a * b) * c)",
            "a * b / c": "((a * b) / c)",
            "a + b / c": "(a + (b / c))",
            "a + b * c + d / e - f": "(((a + (b * c)) + (d / e)) - f)",
            "3 + 4; -5 * 5": "(3 + 4)((-5) * 5)",
            "5 > 4 == 3 < 4": "((5 > 4) == (3 < 4))",
            "5 < 4 != 3 > 4": "((5 < 4) != (3 > 4))",
            "3 + 4 * 5 == 3 * 1 + 4 * 5": "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))",
            "true": "true",
            "false": "false",
            "3 > 5 == false": "((3 > 5) == false)",
            "3 < 5 == true": "((3 < 5) == true)",
            "1 + (2 + 3) + 4": "((1 + (2 + 3)) + 4)",
            "(5 + 5) * 2": "((5 + 5) * 2)",
            "2 / (5 + 5)": "(2 / (5 + 5))",
            "-(5 + 5)": "(-(5 + 5))",
            "!(true == true)": "(!(true == true))",
            "a + add(b * c) + d": "((a + add((b * c))) + d)",
            "add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))": "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))",
            "add(a + b + c * d / f + g)": "add((((a + b) + ((c * d) / f)) + g))",
            "-f(x)": "(-f(x))",
            "f(x)(y)": "f(x)(y)",
            "fn(x) { x }(5)": "fn(x) x(5)",
            "\"a\" + \"b\"": "(a + b)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(parse_ok(self, case)), case)

    def test_if_expression(self):
        expr = self.parse_expression("if (x < y) { x }")
        self.assertIsInstance(expr, ast.IfExpression)
        self.assertEqual("(x < y)", str(expr.condition))
        self.assertEqual(1, len(expr.consequence.statements))
        self.assertEqual("x", str(expr.consequence.statements[0]))
        self.assertIsNone(expr.alternative)
        self.assertEqual("if(x < y) x", str(expr))

    def test_if_else_expression(self):
        expr = self.parse_expression("if (x < y) { x } else { y }")
        self.assertIsInstance(expr, ast.IfExpression)
        self.assertEqual("(x < y)", str(expr.condition))
        self.assertEqual("x", str(expr.consequence))
        self.assertEqual(1, len(expr.alternative.statements))
        self.assertEqual("y", str(expr.alternative.statements[0]))
        self.assertEqual("if(x < y) xelse y", str(expr))

    def test_function_literal(self):
        expr = self.parse_expression("fn(x, y) { x + y; }")
        self.assertIsInstance(expr, ast.FunctionLiteral)
        self.assertEqual(["x", "y"], [param.value for param in expr.parameters])
        self.assertEqual(1, len(expr.body.statements))
        self.assertEqual("(x + y)", str(expr.body.statements[0]))
        self.assertEqual("fn(x, y) (x + y)", str(expr))

    def test_function_parameters(self):
        cases = {
            "fn() {};": [],
            "fn(x) {};": ["x"],
            "fn(x, y, z) {};": ["x", "y", "z"],
        }
        for case, expected in cases.items():
            expr = self.parse_expression(case)
            self.assertEqual(expected, [param.value for param in expr.parameters], case)

    def test_call_expression(self):
        expr = self.parse_expression("add(1, 2 * 3, 4 + 5);")
        self.assertIsInstance(expr, ast.CallExpression)
        self.assertEqual("add", str(expr.function))
        self.assertEqual(["1", "(2 * 3)", "(4 + 5)"], [str(arg) for arg in expr.arguments])
        self.assertEqual("(", expr.token_literal())

    def test_call_arguments(self):
        cases = {
            "f()": [],
            "f(a)": ["a"],
            "f(a, fn(x) { x })": ["a", "fn(x) x"],
        }
        for case, expected in cases.items():
            expr = self.parse_expression(case)
            self.assertEqual(expected, [str(arg) for arg in expr.arguments], case)

    def test_nodes_keep_tokens(self):
        expr = self.parse_expression("if (a) { fn(b) { b }(a) }")
        self.assertEqual("if", expr.token_literal())
        self.assertEqual("{", expr.consequence.token_literal())

        call = expr.consequence.statements[0].expression
        self.assertEqual("(", call.token_literal())
        self.assertEqual("fn", call.function.token_literal())


class ParserErrorTestCase(unittest.TestCase):

    def test_errors(self):
        cases = {
            "let x 5;": ["expected next token to be ASSIGN, got INT instead"],
            "let = 10;": ["expected next token to be IDENT, got ASSIGN instead",
                          "no prefix parse function for ASSIGN found"],
            "let 838383;": ["expected next token to be IDENT, got INT instead"],
            "(1 + 2": ["expected next token to be RPAREN, got EOF instead"],
            "5 @ 5": ["no prefix parse function for ILLEGAL found"],
            "if (x) { x": ["expected next token to be RBRACE, got EOF instead"],
            "9223372036854775808": ["could not parse 9223372036854775808 as integer"],
            "1 +": ["no prefix parse function for EOF found"],
        }
        for case, expected in cases.items():
            __, errors = parse(case)
            self.assertEqual(expected, errors, case)

    def test_first_error(self):
        cases = {
            "if x { x }": "expected next token to be LPAREN, got IDENT instead",
            "fn(x, 1) { x }": "expected next token to be IDENT, got INT instead",
            "fn(x { x }": "expected next token to be RPAREN, got LBRACE instead",
            "fn(x) x": "expected next token to be LBRACE, got IDENT instead",
            "add(1, 2": "expected next token to be RPAREN, got EOF instead",
            "if (x) { x } else y": "expected next token to be LBRACE, got IDENT instead",
        }
        for case, expected in cases.items():
            __, errors = parse(case)
            self.assertTrue(errors, case)
            self.assertEqual(expected, errors[0], case)

    def test_errors_accumulate(self):
        __, errors = parse("let x = 5; let = 10; let 838383;")
        self.assertEqual([
            "expected next token to be IDENT, got ASSIGN instead",
            "no prefix parse function for ASSIGN found",
            "expected next token to be IDENT, got INT instead",
        ], errors)

    def test_recovers_after_bad_statement(self):
        program, errors = parse("let = ; let y = 2;")
        self.assertEqual(3, len(errors))
        self.assertEqual("let y = 2;", str(program))

    def test_parser_object(self):
        parser = Parser(Lexer("let x = ;"))
        program = parser.parse_program()
        self.assertEqual(["no prefix parse function for SEMICOLON found"], parser.errors)
        self.assertEqual((), program.statements)


if __name__ == '__main__':
    unittest.main()
