import sys
from functools import lru_cache
from typing import Optional
from boozetools.support.failureprone import SourceText

from .errors import Error
from .stacking import Frame

class Report:
	"""
	The first fault wins: it keeps the error and a copy of the call stack
	as it stood when the error first appeared. Later faults are the same
	error passing upward, or its consequences, so they change nothing.
	"""
	fault: Optional[Error]
	frames: list[Frame]

	def __init__(self, *, verbose:int=0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self.fault = None
		self.frames = []

	def ok(self): return self.fault is None
	def sick(self): return self.fault is not None

	def reset(self):
		self.fault = None
		self.frames = []

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def record(self, error:Error, frames:list[Frame]):
		assert isinstance(error, Error), error
		if self.fault is None:
			self.fault = error
			self.frames = frames

	def format_trace(self) -> str:
		assert self.sick()
		lines = ["Traceback (most recent call last):"]
		for frame in self.frames:
			lines.append('  File "%s", line %d, in %s' % (frame.path, frame.line, frame.function))
			text = source_line(frame.path, frame.line)
			if text: lines.append("    " + text)
		lines.append(str(self.fault))
		return "\n".join(lines)

	def complain_to_console(self):
		""" Emit the fault, if any, to the console. """
		if self.sick():
			print(self.format_trace(), file=sys.stderr)
			sys.stderr.flush()

def source_line(path:str, line:int) -> str:
	if line < 1: return ""
	source = _fetch(path)
	if source is None: return ""
	try: return source.line_of_text(line).strip()
	except IndexError: return ""

@lru_cache(5)
def _fetch(path) -> Optional[SourceText]:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			source = SourceText(fh.read(), filename=str(path))
	except OSError:
		return None
	# The line table behind line_of_text is built on the first lookup.
	source.find_row_col(0)
	return source
