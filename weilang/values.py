"""
This module defines the basic run-time value types.
Classes, instances and modules live elsewhere; they build on the same root.
"""
from typing import Optional, Callable, Sequence
from .ontology import Value, HashKey
from . import errors

_MASK_64 = (1 << 64) - 1
_SIGN_64 = 1 << 63

_FNV_OFFSET_BASIS = 0xcbf29ce484222325
_FNV_PRIME = 0x100000001b3

def wrap(n:int) -> int:
	""" Two's-complement wrap-around into the signed 64-bit range """
	return ((n + _SIGN_64) & _MASK_64) - _SIGN_64

def fnv1a_64(data:bytes) -> int:
	digest = _FNV_OFFSET_BASIS
	for byte in data:
		digest = ((digest ^ byte) * _FNV_PRIME) & _MASK_64
	return digest

def convert_range(i:int, n:int) -> int:
	""" Normalize a possibly-negative position so 0 <= i <= n, as slicing does. """
	if i < 0: i += n
	return min(max(i, 0), n)

###############################################################################

class Integer(Value):
	type_name = "int"
	def __init__(self, value:int): self.value = wrap(value)
	def render(self, active:set) -> str: return str(self.value)
	def __repr__(self): return "<Integer %d>" % self.value
	def truth(self) -> bool: return self.value != 0
	def hash_key(self) -> HashKey: return HashKey(self.type_name, self.value & _MASK_64)

class String(Value):
	type_name = "str"
	methods: dict[str, "BuiltinMethod"] = {}

	def __init__(self, value:str):
		self.value = value
		self.length = len(value)

	def render(self, active:set) -> str: return self.value
	def __repr__(self): return "<String %r>" % self.value
	def truth(self) -> bool: return self.length > 0
	def hash_key(self) -> HashKey: return HashKey(self.type_name, fnv1a_64(self.value.encode("utf-8")))

	def get_attribute(self, name:str):
		method = self.methods.get(name)
		return None if method is None else method.bind(self)

	def get_item(self, index:Value) -> Value:
		if not isinstance(index, Integer):
			return errors.WrongType("string index must be integer")
		i = index.value + self.length if index.value < 0 else index.value
		if 0 <= i < self.length:
			return String(self.value[i])
		return errors.OutOfRange("string index out of range")

	def iterate(self):
		for i, char in enumerate(self.value):
			yield Integer(i), String(char)

class Boolean(Value):
	type_name = "bool"
	def __init__(self, value:bool, digest:int): self.value, self._digest = value, digest
	def render(self, active:set) -> str: return "true" if self.value else "false"
	def __repr__(self): return "<Boolean %s>" % self
	def truth(self) -> bool: return self.value
	def hash_key(self) -> HashKey: return HashKey(self.type_name, self._digest)

TRUE = Boolean(True, 1)
FALSE = Boolean(False, 0)

def boolean(flag) -> Boolean:
	return TRUE if flag else FALSE

class Null(Value):
	type_name = "null"
	def render(self, active:set) -> str: return "null"
	def truth(self) -> bool: return False
	def hash_key(self) -> HashKey: return HashKey(self.type_name, 0)

NULL = Null()

###############################################################################

class List(Value):
	type_name = "list"
	methods: dict[str, "BuiltinMethod"] = {}

	def __init__(self, elements:list[Value]): self.elements = elements

	def render(self, active:set) -> str:
		if id(self) in active: return "[...]"
		active.add(id(self))
		try: return "[" + ", ".join(e.render(active) for e in self.elements) + "]"
		finally: active.discard(id(self))

	def truth(self) -> bool: return bool(self.elements)

	def get_attribute(self, name:str):
		method = self.methods.get(name)
		return None if method is None else method.bind(self)

	def _position(self, index:Value):
		if not isinstance(index, Integer):
			return errors.WrongType("list index expect 'int', got '%s'" % index.label())
		i = index.value + len(self.elements) if index.value < 0 else index.value
		if 0 <= i < len(self.elements): return i

	def get_item(self, index:Value) -> Value:
		i = self._position(index)
		if i is None: return errors.OutOfRange("list index out of range")
		if isinstance(i, errors.Error): return i
		return self.elements[i]

	def set_item(self, index:Value, value:Value) -> Optional[errors.Error]:
		i = self._position(index)
		if i is None: return errors.OutOfRange("list assignment index out of range")
		if isinstance(i, errors.Error): return i
		self.elements[i] = value

	def iterate(self):
		for i, element in enumerate(self.elements):
			yield Integer(i), element

class Dictionary(Value):
	""" Keyed by HashKey; each entry remembers the original key value for printing and iteration. """
	type_name = "dict"
	pairs: dict[HashKey, tuple[Value, Value]]

	def __init__(self, pairs=None): self.pairs = pairs if pairs is not None else {}

	def render(self, active:set) -> str:
		if id(self) in active: return "{...}"
		active.add(id(self))
		try:
			inside = ", ".join("%s: %s" % (k.render(active), v.render(active)) for k, v in self.pairs.values())
			return "{" + inside + "}"
		finally: active.discard(id(self))

	def truth(self) -> bool: return bool(self.pairs)

	def get_item(self, key:Value) -> Value:
		hk = key.hash_key()
		if hk is None: return errors.unhashable(key)
		try: return self.pairs[hk][1]
		except KeyError: return errors.MissingKey("key '%s' does not exist" % key)

	def set_item(self, key:Value, value:Value) -> Optional[errors.Error]:
		hk = key.hash_key()
		if hk is None: return errors.unhashable(key)
		self.pairs[hk] = key, value

	def get_attribute(self, name:str):
		entry = self.pairs.get(String(name).hash_key())
		if entry is not None and isinstance(entry[0], String): return entry[1]

	def iterate(self):
		for key, value in list(self.pairs.values()):
			yield key, value

###############################################################################

class Function(Value):
	""" A user function: its code together with the environment where it was made. """
	type_name = "function"
	owner = None  # The class whose body defines this, for methods.

	def __init__(self, params:Sequence[str], body, env, name:Optional[str], path:str):
		self.params, self.body, self.env, self.name, self.path = params, body, env, name, path

	def render(self, active:set) -> str: return "<function %s>" % (self.name or "<anonymous>")

class Builtin(Value):
	type_name = "builtin"
	def __init__(self, name:str, fn:Callable[..., Value]): self.name, self.fn = name, fn
	def render(self, active:set) -> str: return "<builtin function %s>" % self.name

class BuiltinMethod(Value):
	""" A native method as it sits in a type's method table, not yet bound to a receiver """
	type_name = "builtin_method"
	def __init__(self, owner_type:str, name:str, fn:Callable[..., Value]):
		self.owner_type, self.name, self.fn = owner_type, name, fn
	def render(self, active:set) -> str: return "<builtin method '%s' of '%s' object>" % (self.name, self.owner_type)
	def bind(self, this:Value) -> "BoundBuiltinMethod": return BoundBuiltinMethod(self, this)

class BoundBuiltinMethod(Value):
	type_name = "bound_builtin_method"
	def __init__(self, method:BuiltinMethod, this:Value): self.method, self.this = method, this
	def render(self, active:set) -> str:
		return "<bound builtin method '%s' of '%s' object>" % (self.method.name, self.method.owner_type)
	def get_attribute(self, name:str):
		if name == "__name__": return String(self.method.name)

###############################################################################

class Return(Value):
	""" Control signal: carries the value of a `return` up to the nearest function boundary. """
	type_name = "return_value"
	def __init__(self, value:Value): self.value = value
	def render(self, active:set) -> str: return self.value.render(active)

class Signal(Value):
	def __init__(self, type_name:str): self.type_name = type_name

BREAK = Signal("break_value")
CONTINUE = Signal("continue_value")

###############################################################################

def truthy(value:Value) -> bool:
	return value.truth()

def equal(a:Value, b:Value, _seen:set=None) -> bool:
	"""
	Structural for strings, integers, lists, and dictionaries; identity otherwise.
	A pair of containers already under comparison counts as equal, which keeps cycles finite.
	"""
	if a is b: return True
	if type(a) is not type(b): return False
	if isinstance(a, (Integer, String)): return a.value == b.value
	if isinstance(a, (List, Dictionary)):
		seen = set() if _seen is None else _seen
		key = id(a), id(b)
		if key in seen: return True
		seen.add(key)
		if isinstance(a, List):
			return len(a.elements) == len(b.elements) and all(
				equal(x, y, seen) for x, y in zip(a.elements, b.elements)
			)
		if a.pairs.keys() != b.pairs.keys(): return False
		return all(equal(v, b.pairs[hk][1], seen) for hk, (_, v) in a.pairs.items())
	return False

def from_native(it) -> Value:
	""" Literals arrive from the scanner as plain Python data. """
	if isinstance(it, bool): return boolean(it)
	if isinstance(it, int): return Integer(it)
	if isinstance(it, str): return String(it)
	if it is None: return NULL
	raise TypeError(it)
