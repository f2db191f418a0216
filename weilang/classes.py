"""
User-defined classes, their instances, and the ways methods get bound.

Every class has a parent. The chain ends at the sentinel root class `object`,
which is its own parent, so a walk up the chain always has somewhere to stop.
All lookups walk the chain at the moment of lookup, so later changes to an
ancestor show through.
"""
from typing import Optional, Iterator
from .ontology import Value
from .values import Function
from . import errors

class Class(Value):
	type_name = "class"

	def __init__(self, name:str, parent:Optional["Class"]):
		self.name = name
		# Only the sentinel root gets None here.
		self.parent = self if parent is None else parent
		self.members:dict[str, Optional[Value]] = {}  # None means declared but pending.
		self.methods:dict[str, Function] = {}
		self.class_members:dict[str, Value] = {}
		self.class_methods:dict[str, Function] = {}
		self.constant_members:set[str] = set()
		self.constant_class_members:set[str] = set()

	def render(self, active:set) -> str: return "<class %s>" % self.name
	def label(self) -> str: return str(self)

	def lineage(self) -> Iterator["Class"]:
		""" This class, then each ancestor, ending with the root. """
		cls = self
		while True:
			yield cls
			if cls.parent is cls: return
			cls = cls.parent

	# Class-body declarations. Each namespace refuses a second declaration of the same name.

	def add_member(self, name:str, default:Optional[Value], constant:bool):
		return self._declare(self.members, self.constant_members, name, default, constant)

	def add_class_member(self, name:str, value:Value, constant:bool):
		return self._declare(self.class_members, self.constant_class_members, name, value, constant)

	def add_method(self, function:Function):
		return self._declare(self.methods, None, function.name, function, False)

	def add_class_method(self, function:Function):
		return self._declare(self.class_methods, None, function.name, function, False)

	def _declare(self, space:dict, constants:Optional[set], name, value, constant):
		if name in space:
			return errors.Redeclared("'%s' redeclared in this block" % name)
		space[name] = value
		if constant: constants.add(name)
		if isinstance(value, Function) and constants is None:
			value.owner = self

	# Run-time queries

	def find_method(self, name:str) -> Optional[Function]:
		for cls in self.lineage():
			if name in cls.methods: return cls.methods[name]

	def is_constant_member(self, name:str) -> bool:
		# The most-derived declaration decides.
		for cls in self.lineage():
			if name in cls.members: return name in cls.constant_members
		return False

	def get_attribute(self, name:str):
		for cls in self.lineage():
			if name in cls.class_members: return cls.class_members[name]
			if name in cls.class_methods: return BoundClassMethod(self, cls.class_methods[name])

	def set_attribute(self, name:str, value:Value):
		# The slot belongs to whichever ancestor declared it; subclasses share it.
		for cls in self.lineage():
			if name in cls.class_members:
				if name in cls.constant_class_members:
					return errors.ConstantReassignment("cannot assign to constant attribute: '%s'" % name)
				cls.class_members[name] = value
				return
		return errors.no_attribute(self, name)

OBJECT = Class("object", None)

class Instance(Value):
	"""
	Members are copied from the whole chain, root first, so overrides win.
	While `initializing`, constant members may still be written.
	"""
	def __init__(self, cls:Class):
		self.cls = cls
		self.members:dict[str, Optional[Value]] = {}
		for ancestor in reversed(list(cls.lineage())):
			self.members.update(ancestor.members)
		self.initializing = True

	@property
	def type_name(self): return self.cls.name

	def render(self, active:set) -> str: return "<%s object at 0x%x>" % (self.cls.name, id(self))

	def get_attribute(self, name:str):
		if name in self.members:
			value = self.members[name]
			return self._pending(name) if value is None else value
		method = self.cls.find_method(name)
		if method is not None: return BoundMethod(self, method)
		if name == "__class__": return self.cls

	def set_attribute(self, name:str, value:Value):
		if name not in self.members:
			return errors.no_attribute(self, name)
		if not self.initializing and self.cls.is_constant_member(name):
			return errors.ConstantReassignment("cannot assign to constant attribute: '%s'" % name)
		self.members[name] = value

	def ready(self) -> Optional[errors.Uninitialized]:
		""" Finish construction: every declared member must have a value by now. """
		for name, value in self.members.items():
			if value is None: return self._pending(name)
		self.initializing = False

	def _pending(self, name):
		return errors.Uninitialized("%s object does not initialize attribute: '%s'" % (self.cls.name, name))

class BoundMethod(Value):
	type_name = "bound_method"
	def __init__(self, this:Instance, function:Function): self.this, self.function = this, function
	def render(self, active:set) -> str:
		return "<bound method '%s' of '%s'>" % (self.function.name, self.this.render(active))

class BoundClassMethod(Value):
	type_name = "bound_class_method"
	def __init__(self, cls:Class, function:Function): self.cls, self.function = cls, function
	def render(self, active:set) -> str:
		return "<class method '%s' of '%s'>" % (self.function.name, self.cls.name)

class SuperView(Value):
	"""
	What `super` means inside a method: look in the parent of the class
	that defines the running method, not the parent of the receiver's class.
	Instance members are never visible this way.
	"""
	type_name = "super"

	def __init__(self, owner:Class, receiver):
		self.owner, self.receiver = owner, receiver

	def get_attribute(self, name:str):
		receiver = self.receiver
		receiver_class = receiver.cls if isinstance(receiver, Instance) else receiver
		if self.owner.parent is self.owner: return None
		for cls in self.owner.parent.lineage():
			if isinstance(receiver, Instance) and name in cls.methods:
				return BoundMethod(receiver, cls.methods[name])
			if name in cls.class_members: return cls.class_members[name]
			if name in cls.class_methods: return BoundClassMethod(receiver_class, cls.class_methods[name])

	def set_attribute(self, name:str, value:Value):
		return errors.NoAttribute("super does not support set attribute")
