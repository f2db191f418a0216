"""
Activation records for diagnostics only: which file, which function, which line.
Bindings live in environments, not here.
"""
from typing import Optional

class Frame:
	def __init__(self, path:str, function:str, line:int=0):
		self.path, self.function, self.line = path, function, line

	def __repr__(self): return "<Frame %s:%d in %s>" % (self.path, self.line, self.function)

	def copy(self) -> "Frame": return Frame(self.path, self.function, self.line)

class CallStack:
	def __init__(self):
		self._frames:list[Frame] = []

	def __len__(self): return len(self._frames)

	def push(self, path:str, function:str) -> Frame:
		frame = Frame(path, function)
		self._frames.append(frame)
		return frame

	def pop(self) -> Frame:
		return self._frames.pop()

	def top(self) -> Optional[Frame]:
		return self._frames[-1] if self._frames else None

	def snapshot(self) -> list[Frame]:
		""" Copies, since the live frames keep moving after a fault. """
		return [f.copy() for f in self._frames]
