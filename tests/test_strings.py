import unittest

from shorthand import *
from weilang import errors
from weilang.values import TRUE, FALSE, List

class Fail(str):
	""" Marks an expected error message in the tables below. """

CASES = [
	("abc", "upper", (), "ABC"),
	("a中文", "upper", (), "A中文"),
	("abc", "upper", (1,), Fail("wrong number of arguments. got=1, want=0")),
	("abc", "count", (), Fail("wrong number of arguments. got=0, want=1-3")),
	("abc", "count", ("b", 1, 2, 3), Fail("wrong number of arguments. got=4, want=1-3")),
	("abc", "count", ("a",), 1),
	("abc", "count", ("a", 1), 0),
	("abc", "count", ("a", -2), 0),
	("abcabc", "count", ("a", -6), 2),
	("abcabc", "count", ("a", 1, 2), 0),
	("abcabc", "count", ("a", -5, -3), 0),
	("中文", "count", ("文",), 1),
	("中文", "count", ("文", 2), 0),
	("中文", "count", ("文", -4), 1),
	("中文中文", "count", ("文", 1, 2), 1),
	("中文中文", "count", ("文", -100, -200), 0),
	("中文中文", "count", ("中文",), 2),
	("中文", "endswith", ("a", 1, 2, 3), Fail("wrong number of arguments. got=4, want=1-3")),
	("中文", "endswith", (1,), Fail("wrong argument type: 'int' at 1")),
	("中文", "endswith", ("", ""), Fail("wrong argument type: 'str' at 2")),
	("中文", "endswith", ("",), True),
	("中文", "endswith", ("a",), False),
	("中文", "endswith", ("文", 0, 1), False),
	("中文abc", "endswith", ("", 0, 1), True),
	("中文abc", "endswith", ("abc", -5), True),
	("中文abc", "endswith", ("ab", -5, -1), True),
	("", "find", (), Fail("wrong number of arguments. got=0, want=1-3")),
	("", "find", ("",), 0),
	("abcdfddfas", "find", ("s",), 9),
	("abcdfddfas", "find", ("saas",), -1),
	("a中文a", "find", ("中文",), 1),
	("", "find", ("", 1), 0),
	("abc", "find", ("", 1), 1),
	("abc", "find", ("中", -100), -1),
	("中文abc中文", "find", ("中文", -2), 5),
	("", "find", ("", 1, ""), Fail("wrong argument type: 'str' at 3")),
	("", "find", ("a", 0, 100), -1),
	("中文abc", "find", ("a", 2, -2), 2),
	("中文abc", "find", ("a", -4, -2), 2),
	("中文abc", "find", ("a", -100, 200), 2),
	("本节将给解释器添加内置函数。", "find", ("。", 5, 100), 13),
	("abc", "format", (), "abc"),
	("abc", "format", (1,), Fail("wrong number of arguments. got=1, want=0")),
	("abc{{}}", "format", (1,), Fail("wrong number of arguments. got=1, want=0")),
	("abc{} {}", "format", (1,), Fail("wrong number of arguments. got=1, want=2")),
	("abc{", "format", (), Fail("single '{' encountered in format string")),
	("abc{ }", "format", (), Fail("single '{' encountered in format string")),
	("abc} ", "format", (), Fail("single '}' encountered in format string")),
	("hello {}", "format", ("john",), "hello john"),
	("hello {{{}}}", "format", (123,), "hello {123}"),
	("hello {{    }}, you are k", "format", (), "hello {    }, you are k"),
	("hello {} {} {} }}", "format", (1, "中文", True), "hello 1 中文 true }"),
	("你好 {} {} {} {{", "format", (1, "中文", True), "你好 1 中文 true {"),
	(",", "join", (), Fail("wrong number of arguments. got=0, want=1")),
	(",", "join", (1, 2), Fail("wrong number of arguments. got=2, want=1")),
	(",", "join", ("abc",), Fail("wrong argument type: 'str'")),
	(",", "join", (mapping(),), Fail("wrong argument type: 'dict'")),
	(",", "join", (listing(),), ""),
	(",", "join", (listing(1, 2, 3),), "1,2,3"),
	("分隔符", "join", (listing(1, True, None, "手掌"),), "1分隔符true分隔符null分隔符手掌"),
	("", "lower", (1,), Fail("wrong number of arguments. got=1, want=0")),
	("Abc中文", "lower", (), "abc中文"),
	("", "split", (), Fail("wrong number of arguments. got=0, want=1-2")),
	("", "split", ("", 2, 2), Fail("wrong number of arguments. got=3, want=1-2")),
	("", "split", (1,), Fail("wrong argument type: 'int' at 1")),
	("", "split", ("",), Fail("empty separator")),
	("", "split", ("a", ""), Fail("wrong argument type: 'str' at 2")),
	("a,b,c", "split", (",",), ["a", "b", "c"]),
	("a，b，c", "split", ("b",), ["a，", "，c"]),
	("编程语言", "split", ("b",), ["编程语言"]),
	("a，b，c", "split", ("，", 0), ["a，b，c"]),
	("a，b，c", "split", ("，", 1), ["a", "b，c"]),
	("a，b，c", "split", ("，", 3), ["a", "b", "c"]),
	("abc", "startswith", (1,), Fail("wrong argument type: 'int' at 1")),
	("abc", "startswith", ("",), True),
	("abc", "startswith", ("abcd",), False),
	("中文abc", "startswith", ("文a",), False),
	("abc", "startswith", ("", 2, ""), Fail("wrong argument type: 'str' at 3")),
	("中文abc", "startswith", ("文a", 1), True),
	("中文abc", "startswith", ("文a", 1, 2), False),
	("中文abc", "startswith", ("文a", -4, -2), True),
	("中文abc", "startswith", ("abc", -3, -2), False),
	("中文abc", "startswith", ("abc", -3, 300), True),
	("中文", "strip", (), Fail("wrong number of arguments. got=0, want=1")),
	("中文", "strip", (1,), Fail("wrong argument type: 'int'")),
	("  abc  ", "strip", ("",), "  abc  "),
	("  中文  ", "strip", (" ",), "中文"),
	("中文abc中文", "strip", ("中文",), "abc"),
	("www.example.com", "strip", ("cmowz.",), "example"),
]

class StringMethodTests(WeiTestCase):

	def test_method_table(self):
		for subject, method_name, args, expect in CASES:
			with self.subTest(subject=subject, method=method_name, args=args):
				result = evaluate(call(dot(subject, method_name), *args))
				if isinstance(expect, Fail):
					self.assertIsInstance(result, errors.Error, str(result))
					self.assertEqual(expect, result.message)
				elif isinstance(expect, bool):
					self.assertIs(TRUE if expect else FALSE, result)
				elif isinstance(expect, int):
					self.assertInteger(expect, result)
				elif isinstance(expect, list):
					self.assertIsInstance(result, List)
					self.assertEqual(expect, [e.value for e in result.elements])
				else:
					self.assertString(expect, result)

	def test_unknown_method(self):
		self.assertError(errors.NoAttribute, "'str' object has no attribute 'ddd'", evaluate(call(dot("abc", "ddd"), 1)))
		self.assertError(errors.NoAttribute, "'str' object has no attribute 'w'", evaluate(dot("abc", "w")))

	def test_bound_method_remembers_its_receiver(self):
		self.assertString("ABC", evaluate(var("f", dot("abc", "upper")), call(name("f"))))
		self.assertString("upper", evaluate(dot(dot("abc", "upper"), "__name__")))

	def test_length_counts_code_points(self):
		self.assertInteger(2, evaluate(call(name("len"), "中文")))

if __name__ == '__main__':
	unittest.main()
