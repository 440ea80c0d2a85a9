import unittest

from minipas.lang import objects
from minipas.lang.environment import Environment
from minipas.lang.evaluator import evaluate
from minipas.syntax.parser import parse


class EvaluatorTestCase(unittest.TestCase):

    def run_source(self, source, env=None):
        program, errors = parse(source)
        self.assertEqual([], errors, source)
        return evaluate(program, env if env is not None else Environment())

    def assert_integer(self, expected, obj, source=None):
        self.assertIsInstance(obj, objects.Integer, source)
        self.assertEqual(expected, obj.value, source)

    def assert_error(self, expected, obj, source=None):
        self.assertIsInstance(obj, objects.Error, source)
        self.assertEqual(expected, obj.message, source)

    def test_integer_expressions(self):
        cases = {
            "5": 5,
            "10;": 10,
            "-5": -5,
            "--5": 5,
            "5 + 5 + 5 + 5 - 10": 10,
            "2 * 2 * 2 * 2 * 2": 32,
            "-50 + 100 + -50": 0,
            "5 + 5 * 2;": 15,
            "20 + 2 * -10": 0,
            "50 / 2 * 2 + 10": 60,
            "2 * (5 + 10)": 30,
            "3 * 3 * 3 + 10": 37,
            "(5 + 10 * 2 + 15 / 3) * 2 + -10": 50,
            "7 / 2": 3,
            "-7 / 2": -3,
            "7 / -2": -3,
            "9223372036854775807 + 1": -9223372036854775808,
        }
        for case, expected in cases.items():
            self.assert_integer(expected, self.run_source(case), case)

    def test_real_expressions(self):
        cases = {
            "1.5": 1.5,
            "-2.5": -2.5,
            "1.5 + 1.5": 3.0,
            "1 + 0.5": 1.5,
            "3.0 / 2": 1.5,
            "2 * 0.25": 0.5,
            "10.": 10.0,
        }
        for case, expected in cases.items():
            result = self.run_source(case)
            self.assertIsInstance(result, objects.Real, case)
            self.assertEqual(expected, result.value, case)

        self.assertEqual("1.5", self.run_source("1.5").inspect())

    def test_boolean_expressions(self):
        cases = {
            "true": True,
            "false": False,
            "1 < 2": True,
            "1 > 2": False,
            "1 < 1": False,
            "1 <= 1": True,
            "2 >= 3": False,
            "1 == 1": True,
            "1 <> 1": False,
            "1 == 2": False,
            "1 <> 2": True,
            "1.5 < 2": True,
            "1 == 1.0": True,
            "true == true": True,
            "false == false": True,
            "true == false": False,
            "true <> false": True,
            "(1 < 2) == true": True,
            "(1 > 2) == true": False,
            "\"a\" == \"a\"": True,
            "\"a\" <> \"b\"": True,
            "\"a\" == 1": False,
            "true <> 1": True,
        }
        for case, expected in cases.items():
            self.assertIs(objects.from_bool(expected), self.run_source(case), case)

    def test_not_operator(self):
        cases = {
            "not true": False,
            "not false": True,
            "not 5": False,
            "not 0": False,
            "not not true": True,
            "not not 5": True,
            "not if false then 1 end": True,
        }
        for case, expected in cases.items():
            self.assertIs(objects.from_bool(expected), self.run_source(case), case)

    def test_conditional_expressions(self):
        cases = {
            "if true then 10 end": 10,
            "if false then 10 end": None,
            "if 1 then 10 end": 10,
            "if 0 then 1 end": 1,
            "if 1 < 2 then 10 end": 10,
            "if 1 > 2 then 10 end": None,
            "if 1 > 2 then 10 end else 20 end": 20,
            "if 1 < 2 then 10 end else 20 end": 10,
            "if \"\" then 3 end": 3,
        }
        for case, expected in cases.items():
            result = self.run_source(case)
            if expected is None:
                self.assertIs(objects.NULL, result, case)
            else:
                self.assert_integer(expected, result, case)

    def test_return_statements(self):
        cases = {
            "return 10;": 10,
            "return 10; 9;": 10,
            "return 2 * 5; 9;": 10,
            "9; return 2 * 5; 9;": 10,
            "if 10 > 1 then if 10 > 1 then return 10; end return 1; end": 10,
        }
        for case, expected in cases.items():
            self.assert_integer(expected, self.run_source(case), case)

    def test_return_inside_expressions(self):
        cases = {
            "procedure f() begin if (if true then return false end) then 1 end else 2 end end; f()": False,
            "procedure f() begin not if true then return false end end; f()": False,
        }
        for case, expected in cases.items():
            self.assertIs(objects.from_bool(expected), self.run_source(case), case)

        cases = {
            "procedure f() begin 1 + if true then return 2 end end; f()": 2,
            "procedure f() begin (if true then return 2 end) + 1 end; f()": 2,
            "procedure f() begin -if true then return 3 end end; f()": 3,
            "procedure f() begin var x: integer := if true then return 5 end; x + 1 end; f()": 5,
            "procedure f() begin var x: integer := 0; x := if true then return 6 end; x end; f()": 6,
            "procedure id(n: integer) begin n end; procedure f() begin id(if true then return 7 end) + 100 end; f()": 7,
            "procedure f() begin return if true then return 8 end; end; f()": 8,
        }
        for case, expected in cases.items():
            self.assert_integer(expected, self.run_source(case), case)

    def test_top_level_return_in_declaration(self):
        env = Environment()
        result = self.run_source("var x: integer := if true then return 5 end; 9", env)

        self.assert_integer(5, result)
        self.assertNotIn("x", env)

    def test_error_handling(self):
        cases = {
            "5 + true;": "type mismatch: INTEGER + BOOLEAN",
            "5 + true; 5;": "type mismatch: INTEGER + BOOLEAN",
            "-true": "unknown operator: -BOOLEAN",
            "-\"a\"": "unknown operator: -STRING",
            "true + false;": "unknown operator: BOOLEAN + BOOLEAN",
            "true < false;": "unknown operator: BOOLEAN < BOOLEAN",
            "5; true + false; 5": "unknown operator: BOOLEAN + BOOLEAN",
            "if 10 > 1 then true + false; end": "unknown operator: BOOLEAN + BOOLEAN",
            "if 10 > 1 then if 10 > 1 then return true + false; end return 1; end": "unknown operator: BOOLEAN + BOOLEAN",
            "if -true then 1 end": "unknown operator: -BOOLEAN",
            "\"a\" - \"b\"": "unknown operator: STRING - STRING",
            "\"a\" + 1": "type mismatch: STRING + INTEGER",
            "foobar": "identifier not found: foobar",
            "10 / 0": "division by zero",
            "1.5 / 0": "division by zero",
            "1 / 0.0": "division by zero",
        }
        for case, expected in cases.items():
            self.assert_error(expected, self.run_source(case), case)

        self.assertEqual("[ERROR]: division by zero", self.run_source("1 / 0").inspect())

    def test_error_stops_block(self):
        env = Environment()
        result = self.run_source("var x: integer := 1; if true then -true; x := 2; end; x := 3;", env)

        self.assert_error("unknown operator: -BOOLEAN", result)
        self.assert_integer(1, env.get("x"))

    def test_declarations(self):
        cases = {
            "var a: integer := 5; a;": 5,
            "var a: integer := 5 * 5; a;": 25,
            "var a: integer := 5; var b: integer := a; b;": 5,
            "var a: integer := 5; var b: integer := a; var c: integer := a + b + 5; c;": 15,
            "const a: integer := 5; a;": 5,
            "var a: integer := 5; var a: integer := 6; a": 6,
            "var a: integer := 5; a := a + 1; a": 6,
        }
        for case, expected in cases.items():
            self.assert_integer(expected, self.run_source(case), case)

        self.assertIsNone(self.run_source("var a: integer := 5;"))

    def test_declared_types_are_not_enforced(self):
        result = self.run_source("var a: integer := 2.5; a")
        self.assertIsInstance(result, objects.Real)
        self.assertEqual(2.5, result.value)

    def test_constants(self):
        cases = {
            "const a: integer := 5; a := 6;": "cannot assign to constant: a",
            "const a: integer := 5; var a: integer := 6;": "cannot redeclare constant: a",
            "const f: integer := 5; procedure f() begin end": "cannot redeclare constant: f",
            "b := 1": "identifier not found: b",
            "var a: integer := -true;": "unknown operator: -BOOLEAN",
        }
        for case, expected in cases.items():
            self.assert_error(expected, self.run_source(case), case)

    def test_strings(self):
        result = self.run_source("\"foo\" + \"bar\"")
        self.assertIsInstance(result, objects.String)
        self.assertEqual("foobar", result.inspect())

    def test_procedures(self):
        cases = {
            "procedure add(x: integer, y: integer) begin return x + y; end; add(1, 2);": 3,
            "procedure double(x: integer) begin x * 2 end; double(4)": 8,
            "procedure double(x: integer) begin x * 2 end; double(double(2))": 8,
            "procedure early(x: integer) begin return x; 100 end; early(7)": 7,
            "var n: integer := 10; procedure addn(x: integer) begin x + n end; addn(5)": 15,
            "var x: integer := 1; procedure f(x: integer) begin x := 5; x end; f(2); x": 1,
            "var count: integer := 0; procedure inc() begin count := count + 1; end; inc(); inc(); count": 2,
            "procedure fact(n: integer) begin if n < 2 then return 1; end return n * fact(n - 1); end; fact(5)": 120,
            "procedure outer() begin procedure inner() begin 42 end; inner() end; outer()": 42,
        }
        for case, expected in cases.items():
            self.assert_integer(expected, self.run_source(case), case)

        self.assertIs(objects.NULL, self.run_source("procedure nothing() begin end; nothing()"))

    def test_procedure_value(self):
        env = Environment()
        result = self.run_source("procedure add(x: integer, y: integer) begin return x + y; end", env)

        self.assertIsInstance(result, objects.Procedure)
        self.assertIs(result, env.get("add"))
        self.assertIs(env, result.env)
        self.assertEqual(["x", "y"], [param.value for param in result.parameters])
        self.assertEqual("procedure add(x: integer, y: integer) begin\n  return (x + y);\nend", result.inspect())

    def test_procedure_errors(self):
        cases = {
            "procedure f(x: integer) begin x end; f()": "wrong number of arguments: want=1, got=0",
            "procedure f() begin 1 end; f(1, 2)": "wrong number of arguments: want=0, got=2",
            "var a: integer := 1; a(1)": "not a procedure: INTEGER",
            "procedure f(x: integer) begin x end; f(-true)": "unknown operator: -BOOLEAN",
            "procedure f() begin var local: integer := 1; local end; f(); local": "identifier not found: local",
            "g()": "identifier not found: g",
        }
        for case, expected in cases.items():
            self.assert_error(expected, self.run_source(case), case)

    def test_unbounded_recursion(self):
        result = self.run_source("procedure spin(n: integer) begin spin(n + 1) end; spin(0)")
        self.assertIsInstance(result, objects.Error)
        self.assertIn("maximum recursion depth exceeded", result.message)

    def test_empty_program(self):
        self.assertIsNone(self.run_source(""))


class ObjectsTestCase(unittest.TestCase):

    def test_singletons(self):
        self.assertIs(objects.TRUE, objects.from_bool(True))
        self.assertIs(objects.FALSE, objects.from_bool(False))
        self.assertEqual("NULL", objects.NULL.inspect())
        self.assertEqual("TRUE", objects.TRUE.inspect())

    def test_truthiness(self):
        should_be_falsy = [objects.FALSE, objects.NULL, objects.Boolean(False)]
        for case in should_be_falsy:
            self.assertFalse(objects.is_truthy(case), case)

        should_be_truthy = [objects.TRUE, objects.Integer(0), objects.Real(0.0), objects.String("")]
        for case in should_be_truthy:
            self.assertTrue(objects.is_truthy(case), case)

    def test_equals(self):
        self.assertTrue(objects.String("a").equals(objects.String("a")))
        self.assertTrue(objects.Boolean(True).equals(objects.TRUE))
        self.assertTrue(objects.NULL.equals(objects.Null()))
        self.assertFalse(objects.Integer(1).equals(objects.Real(1.0)))

    def test_type_tags(self):
        self.assertTrue(objects.is_error(objects.Error("boom")))
        self.assertFalse(objects.is_error(objects.NULL))
        self.assertFalse(objects.is_error(None))
        self.assertTrue(objects.is_control(objects.Error("boom")))
        self.assertTrue(objects.is_control(objects.ReturnValue(objects.FALSE)))
        self.assertFalse(objects.is_control(objects.FALSE))
        self.assertFalse(objects.is_control(None))
        self.assertEqual("RETURN_VALUE", objects.ReturnValue(objects.Integer(1)).type)
        self.assertEqual("1", objects.ReturnValue(objects.Integer(1)).inspect())


if __name__ == '__main__':
    unittest.main()
