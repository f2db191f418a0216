"""
Native methods of the built-in string and list types.

Functions named `_str_xxx` or `_list_xxx` become method `xxx` of the
corresponding type when this module loads. Each takes the receiver
first and then the call arguments, and validates them itself.
Optional start/end positions follow Python's slicing conventions.
"""
from .values import (
	Integer, String, List, BuiltinMethod, boolean, convert_range, equal,
)
from . import errors

def _ranged(args, low:int, high:int):
	if not low <= len(args) <= high:
		return errors.wrong_arity_range(len(args), low, high)

def _exact(args, want:int):
	if len(args) != want:
		return errors.wrong_arity(len(args), want)

def _typed(args, *kinds):
	for position, (arg, kind) in enumerate(zip(args, kinds), 1):
		if not isinstance(arg, kind):
			return errors.wrong_argument_type(arg, position)

def _window(this:String, args):
	"""
	Validate the (needle, [start, [end]]) shape shared by the searching methods.
	Answers either an error or a triple of plain Python values.
	"""
	problem = _ranged(args, 1, 3) or _typed(args, String, Integer, Integer)
	if problem: return problem
	start = convert_range(args[1].value, this.length) if len(args) > 1 else 0
	end = convert_range(args[2].value, this.length) if len(args) > 2 else this.length
	return args[0].value, start, end

###############################################################################

def _str_count(this:String, *args):
	window = _window(this, args)
	if isinstance(window, errors.Error): return window
	needle, start, end = window
	return Integer(this.value.count(needle, start, end))

def _str_endswith(this:String, *args):
	window = _window(this, args)
	if isinstance(window, errors.Error): return window
	needle, start, end = window
	return boolean(this.value.endswith(needle, start, end))

def _str_startswith(this:String, *args):
	window = _window(this, args)
	if isinstance(window, errors.Error): return window
	needle, start, end = window
	return boolean(this.value.startswith(needle, start, end))

def _str_find(this:String, *args):
	window = _window(this, args)
	if isinstance(window, errors.Error): return window
	needle, start, end = window
	return Integer(this.value.find(needle, start, end))

def _str_format(this:String, *args):
	""" Only bare `{}` placeholders; doubled braces stand for themselves. """
	pieces, holes = [""], 0
	text, i = this.value, 0
	while i < len(text):
		c = text[i]
		follow = text[i+1:i+2]
		if c == "{":
			if follow == "{": pieces[-1] += "{"
			elif follow == "}":
				holes += 1
				pieces.append("")
			else: return errors.BadValue("single '{' encountered in format string")
			i += 2
		elif c == "}":
			if follow != "}": return errors.BadValue("single '}' encountered in format string")
			pieces[-1] += "}"
			i += 2
		else:
			pieces[-1] += c
			i += 1
	if len(args) != holes: return errors.wrong_arity(len(args), holes)
	out = [pieces[0]]
	for arg, piece in zip(args, pieces[1:]):
		out.append(str(arg))
		out.append(piece)
	return String("".join(out))

def _str_join(this:String, *args):
	problem = _exact(args, 1)
	if problem: return problem
	if not isinstance(args[0], List): return errors.wrong_argument_type(args[0])
	return String(this.value.join(str(e) for e in args[0].elements))

def _str_lower(this:String, *args):
	return _exact(args, 0) or String(this.value.lower())

def _str_upper(this:String, *args):
	return _exact(args, 0) or String(this.value.upper())

def _str_split(this:String, *args):
	problem = _ranged(args, 1, 2) or _typed(args, String, Integer)
	if problem: return problem
	separator = args[0].value
	if not separator: return errors.BadValue("empty separator")
	limit = args[1].value if len(args) > 1 else -1
	return List([String(s) for s in this.value.split(separator, limit)])

def _str_strip(this:String, *args):
	problem = _exact(args, 1)
	if problem: return problem
	if not isinstance(args[0], String): return errors.wrong_argument_type(args[0])
	return String(this.value.strip(args[0].value))

###############################################################################

def _list_append(this:List, *args):
	if not args: return errors.WrongArity("want at least 1 arguments")
	this.elements.extend(args)
	return this

def _list_extend(this:List, *args):
	problem = _exact(args, 1) or _typed(args, List)
	if problem: return problem
	this.elements.extend(args[0].elements)
	return this

def _list_insert(this:List, *args):
	problem = _exact(args, 2) or _typed(args, Integer)
	if problem: return problem
	index, value = args
	this.elements.insert(convert_range(index.value, len(this.elements)), value)
	return this

def _list_pop(this:List, *args):
	problem = _ranged(args, 0, 1) or _typed(args, Integer)
	if problem: return problem
	if not this.elements: return errors.OutOfRange("pop from empty list")
	if not args: return this.elements.pop()
	i = args[0].value
	if i < 0: i += len(this.elements)
	if not 0 <= i < len(this.elements): return errors.OutOfRange("list pop index out of range")
	return this.elements.pop(i)

def _list_remove(this:List, *args):
	problem = _exact(args, 1)
	if problem: return problem
	for i, element in enumerate(this.elements):
		if equal(element, args[0]):
			del this.elements[i]
			return this
	return errors.BadValue("object not in list")

def _list_reverse(this:List, *args):
	problem = _exact(args, 0)
	if problem: return problem
	this.elements.reverse()
	return this

###############################################################################

def attach_methods(python_scope):
	for prefix, host in (("_str_", String), ("_list_", List)):
		for _k, _v in list(python_scope.items()):
			if _k.startswith(prefix):
				name = _k[len(prefix):]
				host.methods[name] = BuiltinMethod(host.type_name, name, _v)

attach_methods(globals())
