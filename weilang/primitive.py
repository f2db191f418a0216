"""
Build the primitive namespace: what an identifier means when no scope binds it.
Each builtin checks its own arity and argument types and answers with an error value if unhappy.
"""
from .ontology import Value
from .values import Builtin, Integer, String, List, Dictionary, NULL
from .classes import OBJECT
from . import errors

root_namespace:dict[str, Value] = {"object": OBJECT}

def _builtin(fn):
	name = fn.__name__.lstrip("_")
	root_namespace[name] = Builtin(name, fn)
	return fn

def _one_integer(args):
	if len(args) != 1: return errors.wrong_arity(len(args), 1)
	if not isinstance(args[0], Integer): return errors.wrong_argument_type(args[0])

def _radix(fn):
	""" Python-style prefixed digits; the sign goes in front of the prefix. """
	def convert(*args):
		return _one_integer(args) or String(fn(args[0].value))
	convert.__name__ = fn.__name__
	return convert

@_builtin
def _abs(*args):
	return _one_integer(args) or Integer(abs(args[0].value))

_builtin(_radix(bin))
_builtin(_radix(oct))
_builtin(_radix(hex))

@_builtin
def _len(*args):
	if len(args) != 1: return errors.wrong_arity(len(args), 1)
	arg = args[0]
	if isinstance(arg, String): return Integer(arg.length)
	if isinstance(arg, List): return Integer(len(arg.elements))
	if isinstance(arg, Dictionary): return Integer(len(arg.pairs))
	return errors.WrongType("object of type '%s' has no len()" % arg.label())

@_builtin
def _type(*args):
	if len(args) != 1: return errors.wrong_arity(len(args), 1)
	return String(args[0].label())

@_builtin
def _print(*args):
	print(*map(str, args))
	return NULL
