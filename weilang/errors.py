"""
Script failures are ordinary values. Anything that produces one of these
makes its enclosing construct stop and hand it upward, unchanged.
The class says which kind of failure; the kind is what gets printed.
"""
from .ontology import Value

class Error(Value):
	type_name = "error"
	kind = "Error"

	def __init__(self, message:str):
		self.message = message

	def render(self, active:set) -> str: return "%s: %s" % (self.kind, self.message)
	def __repr__(self): return "<%s %r>" % (type(self).__name__, self.message)

class WrongType(Error): kind = "TypeError"
class WrongArity(Error): kind = "ArityError"
class NoAttribute(Error): kind = "AttributeError"
class Undefined(Error): kind = "NameError"
class ConstantReassignment(Error): kind = "ConstReassignmentError"
class Redeclared(Error): kind = "RedeclarationError"
class OutOfRange(Error): kind = "IndexError"
class MissingKey(Error): kind = "KeyError"
class Unhashable(Error): kind = "UnhashableTypeError"
class UnpackMismatch(Error): kind = "UnpackError"
class NotIterable(Error): kind = "NotIterableError"
class NotCallable(Error): kind = "NotCallableError"
class ModuleNotFound(Error): kind = "ModuleNotFoundError"
class BrokenModule(Error): kind = "ImportError"
class Uninitialized(Error): kind = "UninitializedMemberError"
class BadValue(Error): kind = "ValueError"
class ZeroDivision(Error): kind = "ZeroDivisionError"
class TooDeep(Error): kind = "RecursionError"

class Unreachable(Error):
	""" A state the grammar is supposed to prevent. """
	kind = "Unreachable"

###############################################################################

def wrong_arity(got:int, want:int) -> WrongArity:
	return WrongArity("wrong number of arguments. got=%d, want=%d" % (got, want))

def wrong_arity_range(got:int, low:int, high:int) -> WrongArity:
	return WrongArity("wrong number of arguments. got=%d, want=%d-%d" % (got, low, high))

def wrong_arity_for(name:str, got:int, want:int) -> WrongArity:
	return WrongArity("%s wrong number of arguments. got=%d, want=%d" % (name, got, want))

def wrong_argument_type(arg:Value, position:int=None) -> WrongType:
	if position is None:
		return WrongType("wrong argument type: '%s'" % arg.label())
	return WrongType("wrong argument type: '%s' at %d" % (arg.label(), position))

def no_attribute(subject:Value, name:str) -> NoAttribute:
	return NoAttribute("'%s' object has no attribute '%s'" % (subject.label(), name))

def cannot_set_attribute(subject:Value) -> WrongType:
	return WrongType("'%s' object can not set attribute" % subject.label())

def unsupported_operand(op:str, *operands:Value) -> WrongType:
	names = " and ".join("'%s'" % x.label() for x in operands)
	return WrongType("unsupported operand type for %s: %s" % (op, names))

def unhashable(key:Value) -> Unhashable:
	return Unhashable("unhashable type: '%s'" % key.label())

def not_subscriptable(subject:Value) -> WrongType:
	return WrongType("'%s' object is not subscriptable" % subject.label())
