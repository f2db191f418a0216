"""
Here find the module system -- such as it is.

A module is one source file evaluated once in its own root environment.
Modules are cached by absolute path. The cache is an ordinary object
handed to each session, so independent sessions do not see each other's modules.
"""
import os
from pathlib import Path
from typing import Optional, Sequence

from .ontology import Value
from .environment import Environment
from .values import String
from . import errors

SOURCE_SUFFIX = ".wei"

class ModuleInfo(Value):
	""" The `wei` constant every module gets: facts about the module itself. """
	type_name = "wei"

	def __init__(self, path:str):
		self._store = {"filename": String(path)}

	def render(self, active:set) -> str: return "wei"

	def get_attribute(self, name:str):
		return self._store.get(name) or errors.NoAttribute("undefined: 'wei.%s'" % name)

	def set_attribute(self, name:str, value:Value):
		return errors.Undefined("undefined assignment: 'wei.%s'" % name)

class Module(Value):
	type_name = "module"

	def __init__(self, path:str):
		self.path = path
		self.env = Environment()
		self.exports:set[str] = set()
		self.env.declare("wei", ModuleInfo(path), constant=True)

	def render(self, active:set) -> str: return "<module object at '%s'>" % self.path

	def get_attribute(self, name:str):
		if name in self.exports: return self.env.lookup(name)

	def set_attribute(self, name:str, value:Value):
		if name not in self.exports: return errors.no_attribute(self, name)
		return self.env.assign(name, value)

	def export(self, names:Sequence[str]) -> Optional[errors.Error]:
		for name in names:
			if not self.env.holds(name):
				return errors.Undefined("undefined '%s'" % name)
			self.exports.add(name)

class ModuleCache:
	def __init__(self):
		self._modules:dict[str, Module] = {}

	def __contains__(self, path:str): return path in self._modules
	def __len__(self): return len(self._modules)

	def get(self, path:str) -> Optional[Module]:
		return self._modules.get(path)

	def add(self, module:Module):
		assert module.path not in self._modules, module.path
		self._modules[module.path] = module

def resolve_path(name:str) -> str:
	""" Relative to the working directory, whoever does the importing. """
	if not name.endswith(SOURCE_SUFFIX):
		name += SOURCE_SUFFIX
	return str((Path.cwd() / name).resolve())

def import_module(evaluator, name:str) -> Value:
	"""
	The evaluator brings the cache, the parse hook, the call stack, and the
	notion of a current module. Answers the Module or the first error.
	"""
	path = resolve_path(name)
	if not os.path.isfile(path):
		return errors.ModuleNotFound("Not found module: %s" % name)
	cached = evaluator.modules.get(path)
	if cached is not None:
		return cached

	evaluator.report.info("Loading", path)
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except OSError as ex:
		return errors.BrokenModule("Something went pear-shaped while trying to read %s: %s" % (path, ex.strerror))
	try:
		program = evaluator.parse(text, path)
	except SyntaxError as ex:
		return errors.BrokenModule("cannot parse %s: %s" % (path, ex.msg))

	module = Module(path)
	# Cached before evaluation, so a cycle of imports finds the partial module instead of recursing.
	evaluator.modules.add(module)
	previous = evaluator.module
	evaluator.module = module
	evaluator.stack.push(path, "<module>")
	try:
		result = evaluator.run(program, module.env)
	finally:
		evaluator.stack.pop()
		evaluator.module = previous
	if isinstance(result, errors.Error):
		return result
	return module
