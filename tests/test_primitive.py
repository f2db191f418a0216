import io
import unittest
from unittest import mock

from shorthand import *
from weilang import errors
from weilang.values import NULL, Builtin
from weilang.classes import OBJECT
from weilang.primitive import root_namespace

class BuiltinTests(WeiTestCase):

	def test_namespace(self):
		for n in ("abs", "bin", "oct", "hex", "len", "type", "print"):
			with self.subTest(n):
				self.assertIsInstance(root_namespace[n], Builtin)
		self.assertIs(OBJECT, root_namespace["object"])

	def test_abs(self):
		self.assertInteger(5, evaluate(call(name("abs"), unary("-", 5))))
		self.assertError(errors.WrongArity, "wrong number of arguments. got=2, want=1", evaluate(call(name("abs"), 1, 2)))
		self.assertError(errors.WrongType, "wrong argument type: 'str'", evaluate(call(name("abs"), "x")))

	def test_radix(self):
		self.assertString("0b101", evaluate(call(name("bin"), 5)))
		self.assertString("-0b101", evaluate(call(name("bin"), unary("-", 5))))
		self.assertString("0o10", evaluate(call(name("oct"), 8)))
		self.assertString("0xff", evaluate(call(name("hex"), 255)))
		self.assertError(errors.WrongType, "wrong argument type: 'bool'", evaluate(call(name("hex"), True)))

	def test_len(self):
		self.assertInteger(3, evaluate(call(name("len"), "abc")))
		self.assertInteger(2, evaluate(call(name("len"), listing(1, 2))))
		self.assertInteger(1, evaluate(call(name("len"), mapping((1, 2)))))
		self.assertError(errors.WrongType, "object of type 'int' has no len()", evaluate(call(name("len"), 1)))
		self.assertError(errors.WrongArity, "wrong number of arguments. got=0, want=1", evaluate(call(name("len"))))

	def test_type(self):
		cases = [
			(1, "int"), ("s", "str"), (True, "bool"), (None, "null"),
			(listing(), "list"), (mapping(), "dict"), (fn([]), "function"),
			(name("len"), "builtin"), (dot("s", "upper"), "bound_builtin_method"),
			(name("object"), "<class object>"),
		]
		for tree, expect in cases:
			with self.subTest(expect):
				self.assertString(expect, evaluate(call(name("type"), tree)))

	def test_print(self):
		with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
			result = evaluate(call(name("print"), "hello", 1, listing("a", None), True))
		self.assertIs(NULL, result)
		self.assertEqual("hello 1 [a, null] true\n", out.getvalue())

	def test_scopes_shadow_builtins(self):
		self.assertInteger(7, evaluate(var("len", fn(["x"], ret(7))), call(name("len"), "abc")))

if __name__ == '__main__':
	unittest.main()
