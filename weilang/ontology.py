"""
These most-fundamental classes in the value hierarchy are separate
from the rest to avoid various circular-import scenarios: the error
taxonomy is itself made of values, and nearly every concrete value
wants to report errors.
"""
from typing import NamedTuple, Optional, Iterator

class HashKey(NamedTuple):
	""" What a dictionary actually indexes by: a type tag and a 64-bit digest. """
	type_name: str
	digest: int

class Value:
	"""
	Root for everything a script can hold in a variable.
	The type tag is a class attribute; error messages and dispatch both use it.
	"""
	type_name = "object"

	def __str__(self): return self.render(set())

	def render(self, active:set) -> str:
		"""
		Printable form. Containers override this and track the ids
		of the containers already being printed in `active`.
		"""
		return "<%s>" % self.type_name

	def label(self) -> str:
		""" How error messages should name this value's type. """
		return self.type_name

	def truth(self) -> bool: return True

	def hash_key(self) -> Optional[HashKey]:
		""" None means unhashable. """
		return None

	def get_attribute(self, name:str) -> Optional["Value"]:
		""" None means there is no such attribute. Subclasses may also return an error value. """
		return None

	def set_attribute(self, name:str, value:"Value") -> Optional["Value"]:
		"""
		Returns None on success, or else an error value.
		NotImplemented means the type has no settable attributes at all.
		"""
		return NotImplemented

	def iterate(self) -> Optional[Iterator[tuple["Value", ...]]]:
		""" None means not iterable. Each step is a tuple of values. """
		return None
