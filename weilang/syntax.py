"""
The set of parse-nodes the evaluator walks.
The parser lives elsewhere; it calls these constructors in a bottom-up tree transduction.
Every node can carry the (1-based) line where it begins. Zero means nobody said.
"""
from typing import Optional, Any, Sequence


class Phrase:
	line: int = 0

	def at(self, line:int):
		""" Record the source line. Returns self so a parser can chain it. """
		self.line = line
		return self

class Statement(Phrase): pass

class Expression(Phrase): pass

###############################################################################

class Block(Statement):
	statements: Sequence[Statement]
	def __init__(self, statements:Sequence[Statement]): self.statements = statements
	def __repr__(self): return "<Block of %d>" % len(self.statements)

class Program(Block):
	""" The root of a parsed file. Unlike a block, it does not open a new scope. """
	def __repr__(self): return "<Program of %d>" % len(self.statements)

class VarDecl(Statement):
	""" Both `var` and `con`. A missing initializer means null. """
	def __init__(self, name:str, value:Optional[Expression], constant:bool=False):
		self.name, self.value, self.constant = name, value, constant
	def __repr__(self): return "<%s %s>" % ("con" if self.constant else "var", self.name)

class Assign(Statement):
	# target is an Identifier, Subscript, or Attribute.
	def __init__(self, target:Expression, value:Expression):
		self.target, self.value = target, value

class ExpressionStatement(Statement):
	def __init__(self, expr:Expression): self.expr = expr

class Return(Statement):
	def __init__(self, value:Optional[Expression]=None): self.value = value

class If(Statement):
	""" A chain of `if`/`else if` branches with an optional final `else`. """
	branches: Sequence[tuple[Expression, Block]]
	otherwise: Optional[Block]
	def __init__(self, branches, otherwise:Optional[Block]=None):
		assert branches
		self.branches, self.otherwise = branches, otherwise

class While(Statement):
	def __init__(self, condition:Expression, body:Block):
		self.condition, self.body = condition, body

class ForIn(Statement):
	targets: Sequence[str]
	def __init__(self, targets:Sequence[str], subject:Expression, body:Block, constant:bool=False):
		assert targets
		self.targets, self.subject, self.body, self.constant = targets, subject, body, constant

class Break(Statement): pass

class Continue(Statement): pass

class FunctionDefinition(Statement):
	""" The statement form `fn name(...) {...}` """
	def __init__(self, function:"FunctionLiteral"):
		assert function.name
		self.function = function

class ClassDefinition(Statement):
	body: Sequence["MemberDeclaration | MethodDefinition"]
	def __init__(self, name:str, parent:Optional[Expression], body:Sequence[Statement]):
		self.name, self.parent, self.body = name, parent, body
	def __repr__(self): return "<class %s>" % self.name

class MemberDeclaration(Statement):
	""" `var|con [class.]name [= expr]` inside a class body """
	def __init__(self, name:str, value:Optional[Expression], constant:bool=False, class_level:bool=False):
		self.name, self.value, self.constant, self.class_level = name, value, constant, class_level

class MethodDefinition(Statement):
	""" `fn [class.]name(...) {...}` inside a class body """
	def __init__(self, function:"FunctionLiteral", class_level:bool=False):
		assert function.name
		self.function, self.class_level = function, class_level

class Export(Statement):
	def __init__(self, names:Sequence[str]): self.names = names

###############################################################################

class Literal(Expression):
	""" Plays an int, str, bool, or None from the scanner. """
	def __init__(self, value:Any): self.value = value
	def __repr__(self): return "<Literal %r>" % (self.value,)

class Identifier(Expression):
	def __init__(self, name:str): self.name = name
	def __repr__(self): return "<Identifier %s>" % self.name

class ListLiteral(Expression):
	def __init__(self, elements:Sequence[Expression]): self.elements = elements

class DictLiteral(Expression):
	pairs: Sequence[tuple[Expression, Expression]]
	def __init__(self, pairs): self.pairs = pairs

class FunctionLiteral(Expression):
	def __init__(self, params:Sequence[str], body:Block, name:Optional[str]=None):
		self.params, self.body, self.name = params, body, name
	def __repr__(self): return "<fn %s(%s)>" % (self.name or "", ", ".join(self.params))

class Unary(Expression):
	def __init__(self, op:str, operand:Expression): self.op, self.operand = op, operand

class Binary(Expression):
	def __init__(self, lhs:Expression, op:str, rhs:Expression):
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def __repr__(self): return "<Binary %s>" % self.op

class ShortCut(Expression):
	""" `and` / `or`: the right side is evaluated only when it matters. """
	def __init__(self, lhs:Expression, op:str, rhs:Expression):
		assert op in ("and", "or"), op
		self.lhs, self.op, self.rhs = lhs, op, rhs

class Call(Expression):
	def __init__(self, fn:Expression, args:Sequence[Expression]): self.fn, self.args = fn, args

class Subscript(Expression):
	def __init__(self, subject:Expression, index:Expression): self.subject, self.index = subject, index

class Attribute(Expression):
	def __init__(self, subject:Expression, name:str): self.subject, self.name = subject, name
	def __repr__(self): return "<Attribute .%s>" % self.name

class Import(Expression):
	def __init__(self, path:Expression): self.path = path
