"""
Lexical scopes, as the canonical list-structured search.

Each scope knows its own bindings, which of them are constant, and its outer scope.
Closures hold on to the very scope object they were born in, so later
assignments into that scope are visible to them.
"""
from typing import Optional
from .ontology import Value
from . import errors

class Environment:
	def __init__(self, outer:Optional["Environment"]=None):
		self._bindings:dict[str, Value] = {}
		self._constants:set[str] = set()
		self.outer = outer

	def child(self) -> "Environment":
		return Environment(self)

	def holds(self, name:str) -> bool:
		""" Only the innermost scope counts here. """
		return name in self._bindings

	def declare(self, name:str, value:Value, constant:bool=False) -> Optional[errors.Redeclared]:
		if name in self._bindings:
			return errors.Redeclared("variable name '%s' redeclared in this block" % name)
		self._bindings[name] = value
		if constant: self._constants.add(name)

	def bind_parameter(self, name:str, value:Value):
		# Parameters may shadow anything and are never constant.
		self._bindings[name] = value

	def lookup(self, name:str) -> Optional[Value]:
		env = self
		while env is not None:
			if name in env._bindings: return env._bindings[name]
			env = env.outer

	def assign(self, name:str, value:Value) -> Optional[errors.Error]:
		env = self
		while env is not None:
			if name in env._bindings:
				if name in env._constants:
					return errors.ConstantReassignment("cannot assign to constant: '%s'" % name)
				env._bindings[name] = value
				return
			env = env.outer
		return errors.Undefined("undefined: '%s'" % name)
