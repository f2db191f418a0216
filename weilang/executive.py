"""
I decided to factor out the run-time from the executive.
This is what a host program holds on to: one Session per independent run.
The parser is somebody else's business; hand its entry point in as `parse(text, path)`.
"""
import sys
from pathlib import Path
from typing import Callable, Optional

from . import syntax, errors
from .ontology import Value
from .values import Return, Signal
from .environment import Environment
from .diagnostics import Report
from .evaluator import Evaluator
from .modularity import Module, ModuleCache

PARSE_HOOK = Callable[[str, str], syntax.Program]

def is_error_value(value:Value) -> bool:
	return isinstance(value, errors.Error)

class Session:
	def __init__(self, parse:PARSE_HOOK, *, modules:Optional[ModuleCache]=None, verbose:int=0, recursion_limit:int=10_000):
		self.report = Report(verbose=verbose)
		self.modules = ModuleCache() if modules is None else modules
		self.evaluator = Evaluator(parse, self.modules, self.report)
		# Each script-level call costs a dozen or so Python frames.
		self.recursion_limit = recursion_limit

	def new_module_environment(self, path:str="") -> Environment:
		"""
		Make (and make current) a fresh module. A module with a path joins the
		cache, so that importing the main file from elsewhere finds this one.
		"""
		if path: path = str(Path(path).resolve())
		module = self.modules.get(path) if path else None
		if module is None:
			module = Module(path)
			if path: self.modules.add(module)
		self.evaluator.module = module
		return module.env

	def evaluate(self, node:syntax.Phrase, env:Environment) -> Value:
		"""
		Evaluate any node: a whole program, one statement, or an expression.
		Control signals never escape from here, and neither does any Python
		exception a script could provoke. The interpreter's recursion limit is
		raised to `recursion_limit` only while evaluation runs.
		"""
		ev = self.evaluator
		self.report.reset()
		bottom = not len(ev.stack)
		if bottom: ev.stack.push(ev.module.path if ev.module else "", "<module>")
		prior_limit = sys.getrecursionlimit()
		if self.recursion_limit > prior_limit:
			sys.setrecursionlimit(self.recursion_limit)
		try:
			if isinstance(node, syntax.Program): result = ev.run(node, env)
			elif isinstance(node, syntax.Statement): result = ev.execute(node, env)
			else: result = ev.visit(node, env)
			if isinstance(result, Return): result = result.value
			elif isinstance(result, Signal): result = ev.fault(errors.Unreachable("'%s' outside of a loop" % result.type_name))
			elif isinstance(result, errors.Error): ev.fault(result)
		except RecursionError:
			result = ev.fault(errors.TooDeep("maximum recursion depth exceeded"))
		finally:
			sys.setrecursionlimit(prior_limit)
			if bottom: ev.stack.pop()
		return result

	def run_file(self, path:str) -> Value:
		""" Read, parse, and evaluate a main program. Complains to the console on failure. """
		self.report.reset()
		self.report.info("Loading", path)
		try:
			with open(path, "r", encoding="utf-8") as fh:
				text = fh.read()
			env = self.new_module_environment(path)
			program = self.evaluator.parse(text, self.evaluator.module.path)
		except OSError as ex:
			result = errors.BrokenModule("Something went pear-shaped while trying to read %s: %s" % (path, ex.strerror))
			self.report.record(result, [])
		except SyntaxError as ex:
			result = errors.BrokenModule("cannot parse %s: %s" % (path, ex.msg))
			self.report.record(result, [])
		else:
			result = self.evaluate(program, env)
		if is_error_value(result):
			self.report.complain_to_console()
		return result

	def complain_to_console(self):
		self.report.complain_to_console()
