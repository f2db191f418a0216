import unittest

from weilang.environment import Environment
from weilang.values import Integer
from weilang import errors

ONE, TWO = Integer(1), Integer(2)

class EnvironmentTests(unittest.TestCase):

	def test_declare_then_lookup(self):
		env = Environment()
		self.assertIsNone(env.declare("a", ONE))
		self.assertIs(ONE, env.lookup("a"))
		self.assertIsNone(env.lookup("b"))

	def test_redeclaration_in_same_scope(self):
		env = Environment()
		env.declare("a", ONE)
		problem = env.declare("a", TWO)
		self.assertIsInstance(problem, errors.Redeclared)
		self.assertEqual("variable name 'a' redeclared in this block", problem.message)
		self.assertIs(ONE, env.lookup("a"))

	def test_shadowing_in_nested_scope(self):
		outer = Environment()
		outer.declare("a", ONE)
		inner = outer.child()
		self.assertIsNone(inner.declare("a", TWO))
		self.assertIs(TWO, inner.lookup("a"))
		self.assertIs(ONE, outer.lookup("a"))

	def test_assign_reaches_the_owning_scope(self):
		outer = Environment()
		outer.declare("a", ONE)
		inner = outer.child().child()
		self.assertIsNone(inner.assign("a", TWO))
		self.assertIs(TWO, outer.lookup("a"))
		self.assertFalse(inner.holds("a"))

	def test_constants(self):
		outer = Environment()
		outer.declare("k", ONE, constant=True)
		problem = outer.child().assign("k", TWO)
		self.assertIsInstance(problem, errors.ConstantReassignment)
		self.assertEqual("cannot assign to constant: 'k'", problem.message)
		self.assertIs(ONE, outer.lookup("k"))

	def test_shadowing_a_constant_makes_a_fresh_variable(self):
		outer = Environment()
		outer.declare("k", ONE, constant=True)
		inner = outer.child()
		inner.declare("k", ONE)
		self.assertIsNone(inner.assign("k", TWO))

	def test_assign_to_nothing(self):
		problem = Environment().assign("ghost", ONE)
		self.assertIsInstance(problem, errors.Undefined)
		self.assertEqual("undefined: 'ghost'", problem.message)

	def test_bind_parameter_is_unchecked(self):
		env = Environment()
		env.declare("a", ONE, constant=True)
		env.bind_parameter("a", TWO)
		self.assertIs(TWO, env.lookup("a"))

if __name__ == '__main__':
	unittest.main()
