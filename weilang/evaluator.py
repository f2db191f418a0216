"""
The tree-walking evaluator proper.

Every visit answers a value. Errors and the control signals (return, break,
continue) are values too: each construct checks what its parts answered and
passes those upward unchanged, so nothing here raises on behalf of a script.
"""
import operator
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor

from . import syntax, errors, primitive, modularity
from . import methods  # NOQA: installs the string and list methods
from .ontology import Value
from .environment import Environment
from .values import (
	Integer, String, List, Dictionary, Function, Builtin, BoundBuiltinMethod,
	Return, Signal, BREAK, CONTINUE, NULL,
	boolean, truthy, equal, from_native,
)
from .classes import Class, Instance, BoundMethod, BoundClassMethod, SuperView, OBJECT
from .stacking import CallStack
from .diagnostics import Report

def _arithmetic(fn):
	return lambda a, b: Integer(fn(a, b))

def _relation(fn):
	return lambda a, b: boolean(fn(a, b))

def _divide(a, b):
	# Truncates toward zero.
	if b == 0: return errors.ZeroDivision("integer division by zero")
	q = abs(a) // abs(b)
	return Integer(q if (a < 0) == (b < 0) else -q)

def _modulo(a, b):
	# The remainder takes the sign of the dividend.
	if b == 0: return errors.ZeroDivision("integer modulo by zero")
	r = abs(a) % abs(b)
	return Integer(-r if a < 0 else r)

def _shift_left(a, b):
	if b < 0: return errors.BadValue("negative shift count")
	return Integer(a << b) if b < 64 else Integer(0)

def _shift_right(a, b):
	if b < 0: return errors.BadValue("negative shift count")
	return Integer(a >> min(b, 63))

INTEGER_BINARY = {
	"+" : _arithmetic(operator.add),
	"-" : _arithmetic(operator.sub),
	"*" : _arithmetic(operator.mul),
	"/" : _divide,
	"%" : _modulo,
	"&" : _arithmetic(operator.and_),
	"|" : _arithmetic(operator.or_),
	"^" : _arithmetic(operator.xor),
	"<<" : _shift_left,
	">>" : _shift_right,
	"<" : _relation(operator.lt),
	"<=" : _relation(operator.le),
	">" : _relation(operator.gt),
	">=" : _relation(operator.ge),
	"==" : _relation(operator.eq),
	"!=" : _relation(operator.ne),
}

INTEGER_UNARY = {
	"-" : operator.neg,
	"+" : operator.pos,
	"~" : operator.invert,
}

def _interrupts(result:Value) -> bool:
	""" Does this result end the statement sequence that produced it? """
	return isinstance(result, (Return, errors.Error, Signal))

class Evaluator(Visitor):
	"""
	One of these per session. It holds what a running program needs beyond
	its environments: the module cache, the current module, the parse hook
	for imports, the call stack, and the report that keeps the first fault.
	"""
	module: Optional[modularity.Module]

	def __init__(self, parse, modules:modularity.ModuleCache, report:Report):
		self.parse = parse
		self.modules = modules
		self.report = report
		self.stack = CallStack()
		self.module = None

	def run(self, program:syntax.Program, env:Environment) -> Value:
		return self.visit(program, env)

	def execute(self, statement:syntax.Statement, env:Environment, *args) -> Value:
		frame = self.stack.top()
		if frame is not None and statement.line:
			frame.line = statement.line
		result = self.visit(statement, env, *args)
		if isinstance(result, errors.Error):
			self.report.record(result, self.stack.snapshot())
		return result

	def fault(self, error:errors.Error) -> errors.Error:
		self.report.record(error, self.stack.snapshot())
		return error

	def _stray(self, signal:Signal) -> errors.Error:
		return self.fault(errors.Unreachable("'%s' outside of a loop" % signal.type_name))

	def _path(self) -> str:
		return self.module.path if self.module is not None else ""

	###########################################################################
	# Statements

	def visit_Program(self, program:syntax.Program, env:Environment):
		# Top-level statements run directly in the module's own scope.
		result = NULL
		for statement in program.statements:
			result = self.execute(statement, env)
			if isinstance(result, Return): return result.value
			if isinstance(result, errors.Error): return result
			if isinstance(result, Signal): return self._stray(result)
		return result

	def visit_Block(self, block:syntax.Block, env:Environment):
		inner = env.child()
		result = NULL
		for statement in block.statements:
			result = self.execute(statement, inner)
			if _interrupts(result): break
		return result

	def visit_VarDecl(self, decl:syntax.VarDecl, env:Environment):
		value = NULL
		if decl.value is not None:
			value = self.visit(decl.value, env)
			if isinstance(value, errors.Error): return value
		return env.declare(decl.name, value, decl.constant) or NULL

	def visit_Assign(self, assign:syntax.Assign, env:Environment):
		value = self.visit(assign.value, env)
		if isinstance(value, errors.Error): return value
		target = assign.target
		if isinstance(target, syntax.Identifier):
			return env.assign(target.name, value) or NULL
		subject = self.visit(target.subject, env)
		if isinstance(subject, errors.Error): return subject
		if isinstance(target, syntax.Subscript):
			index = self.visit(target.index, env)
			if isinstance(index, errors.Error): return index
			if isinstance(subject, (List, Dictionary)):
				return subject.set_item(index, value) or NULL
			return errors.not_subscriptable(subject)
		if isinstance(target, syntax.Attribute):
			outcome = subject.set_attribute(target.name, value)
			if outcome is NotImplemented: return errors.cannot_set_attribute(subject)
			return outcome or NULL
		return errors.Unreachable("cannot assign to %r" % target)

	def visit_ExpressionStatement(self, stmt:syntax.ExpressionStatement, env:Environment):
		return self.visit(stmt.expr, env)

	def visit_Return(self, stmt:syntax.Return, env:Environment):
		if stmt.value is None: return Return(NULL)
		value = self.visit(stmt.value, env)
		if isinstance(value, errors.Error): return value
		return Return(value)

	def visit_If(self, stmt:syntax.If, env:Environment):
		for condition, block in stmt.branches:
			test = self.visit(condition, env)
			if isinstance(test, errors.Error): return test
			if truthy(test): return self.visit(block, env)
		if stmt.otherwise is not None:
			return self.visit(stmt.otherwise, env)
		return NULL

	def visit_While(self, stmt:syntax.While, env:Environment):
		while True:
			test = self.visit(stmt.condition, env)
			if isinstance(test, errors.Error): return test
			if not truthy(test): return NULL
			result = self.visit(stmt.body, env)
			if isinstance(result, (Return, errors.Error)): return result
			if result is BREAK: return NULL

	def visit_ForIn(self, stmt:syntax.ForIn, env:Environment):
		subject = self.visit(stmt.subject, env)
		if isinstance(subject, errors.Error): return subject
		steps = self.iterate(subject)
		if isinstance(steps, errors.Error): return steps
		want = len(stmt.targets)
		for step in steps:
			if len(step) != want:
				adjective = "too many" if len(step) > want else "not enough"
				return errors.UnpackMismatch("%s values to unpack (expected %d, got %d)" % (adjective, want, len(step)))
			scope = env.child()
			for name, value in zip(stmt.targets, step):
				problem = scope.declare(name, value, stmt.constant)
				if problem: return problem
			result = self.visit(stmt.body, scope)
			if isinstance(result, (Return, errors.Error)): return result
			if result is BREAK: break
		return NULL

	def visit_Break(self, stmt:syntax.Break, env:Environment): return BREAK

	def visit_Continue(self, stmt:syntax.Continue, env:Environment): return CONTINUE

	def visit_FunctionDefinition(self, stmt:syntax.FunctionDefinition, env:Environment):
		function = self.visit(stmt.function, env)
		return env.declare(function.name, function) or NULL

	def visit_ClassDefinition(self, stmt:syntax.ClassDefinition, env:Environment):
		parent = OBJECT
		if stmt.parent is not None:
			parent = self.visit(stmt.parent, env)
			if isinstance(parent, errors.Error): return parent
			if not isinstance(parent, Class):
				return errors.WrongType("class '%s' cannot inherit from '%s'" % (stmt.name, parent.label()))
		cls = Class(stmt.name, parent)
		# The name is bound first, so the body can refer to the class.
		problem = env.declare(stmt.name, cls, constant=True)
		if problem: return problem
		for member in stmt.body:
			result = self.execute(member, env, cls)
			if isinstance(result, errors.Error): return result
		return NULL

	def visit_MemberDeclaration(self, decl:syntax.MemberDeclaration, env:Environment, cls:Class):
		value = None
		if decl.value is not None:
			value = self.visit(decl.value, env)
			if isinstance(value, errors.Error): return value
		if decl.class_level:
			return cls.add_class_member(decl.name, NULL if value is None else value, decl.constant) or NULL
		return cls.add_member(decl.name, value, decl.constant) or NULL

	def visit_MethodDefinition(self, defn:syntax.MethodDefinition, env:Environment, cls:Class):
		function = self.visit(defn.function, env)
		if defn.class_level:
			return cls.add_class_method(function) or NULL
		return cls.add_method(function) or NULL

	def visit_Export(self, stmt:syntax.Export, env:Environment):
		if self.module is None: return errors.Unreachable("export outside of a module")
		return self.module.export(stmt.names) or NULL

	###########################################################################
	# Expressions

	def visit_Literal(self, expr:syntax.Literal, env:Environment):
		return from_native(expr.value)

	def visit_Identifier(self, expr:syntax.Identifier, env:Environment):
		value = env.lookup(expr.name)
		if value is None:
			value = primitive.root_namespace.get(expr.name)
		if value is None:
			return errors.Undefined("undefined: '%s'" % expr.name)
		return value

	def visit_ListLiteral(self, expr:syntax.ListLiteral, env:Environment):
		elements = self.evaluate_each(expr.elements, env)
		if isinstance(elements, errors.Error): return elements
		return List(elements)

	def visit_DictLiteral(self, expr:syntax.DictLiteral, env:Environment):
		it = Dictionary()
		for key_expr, value_expr in expr.pairs:
			key = self.visit(key_expr, env)
			if isinstance(key, errors.Error): return key
			if key.hash_key() is None: return errors.unhashable(key)
			value = self.visit(value_expr, env)
			if isinstance(value, errors.Error): return value
			it.set_item(key, value)
		return it

	def visit_FunctionLiteral(self, expr:syntax.FunctionLiteral, env:Environment):
		return Function(expr.params, expr.body, env, expr.name, self._path())

	def visit_Unary(self, expr:syntax.Unary, env:Environment):
		operand = self.visit(expr.operand, env)
		if isinstance(operand, errors.Error): return operand
		if expr.op == "not": return boolean(not truthy(operand))
		if isinstance(operand, Integer) and expr.op in INTEGER_UNARY:
			return Integer(INTEGER_UNARY[expr.op](operand.value))
		return errors.unsupported_operand(expr.op, operand)

	def visit_Binary(self, expr:syntax.Binary, env:Environment):
		lhs = self.visit(expr.lhs, env)
		if isinstance(lhs, errors.Error): return lhs
		rhs = self.visit(expr.rhs, env)
		if isinstance(rhs, errors.Error): return rhs
		return binary_operation(expr.op, lhs, rhs)

	def visit_ShortCut(self, expr:syntax.ShortCut, env:Environment):
		lhs = self.visit(expr.lhs, env)
		if isinstance(lhs, errors.Error): return lhs
		if truthy(lhs) == (expr.op == "or"): return boolean(truthy(lhs))
		rhs = self.visit(expr.rhs, env)
		if isinstance(rhs, errors.Error): return rhs
		return boolean(truthy(rhs))

	def visit_Call(self, expr:syntax.Call, env:Environment):
		function = self.visit(expr.fn, env)
		if isinstance(function, errors.Error): return function
		args = self.evaluate_each(expr.args, env)
		if isinstance(args, errors.Error): return args
		return self.apply(function, args)

	def visit_Subscript(self, expr:syntax.Subscript, env:Environment):
		subject = self.visit(expr.subject, env)
		if isinstance(subject, errors.Error): return subject
		index = self.visit(expr.index, env)
		if isinstance(index, errors.Error): return index
		if isinstance(subject, (List, String, Dictionary)):
			return subject.get_item(index)
		return errors.not_subscriptable(subject)

	def visit_Attribute(self, expr:syntax.Attribute, env:Environment):
		subject = self.visit(expr.subject, env)
		if isinstance(subject, errors.Error): return subject
		found = subject.get_attribute(expr.name)
		return errors.no_attribute(subject, expr.name) if found is None else found

	def visit_Import(self, expr:syntax.Import, env:Environment):
		path = self.visit(expr.path, env)
		if isinstance(path, errors.Error): return path
		if not isinstance(path, String): return errors.wrong_argument_type(path)
		return modularity.import_module(self, path.value)

	def evaluate_each(self, exprs:Sequence[syntax.Expression], env:Environment):
		""" Left to right; the first error wins. """
		results = []
		for expr in exprs:
			value = self.visit(expr, env)
			if isinstance(value, errors.Error): return value
			results.append(value)
		return results

	###########################################################################
	# Application and iteration

	def apply(self, function:Value, args:Sequence[Value]) -> Value:
		if isinstance(function, Function):
			return self._call(function, args, {})
		if isinstance(function, BoundMethod):
			return self._call(function.function, args, self._receiver("this", function.this, function.function))
		if isinstance(function, BoundClassMethod):
			return self._call(function.function, args, self._receiver("cls", function.cls, function.function))
		if isinstance(function, Class):
			return self.construct(function, args)
		if isinstance(function, Builtin):
			return function.fn(*args)
		if isinstance(function, BoundBuiltinMethod):
			return function.method.fn(function.this, *args)
		return errors.NotCallable("'%s' object is not callable" % function.label())

	@staticmethod
	def _receiver(name:str, receiver:Value, function:Function) -> dict:
		bindings = {name: receiver}
		if function.owner is not None:
			bindings["super"] = SuperView(function.owner, receiver)
		return bindings

	def _call(self, function:Function, args:Sequence[Value], bindings:dict) -> Value:
		if len(args) != len(function.params):
			return errors.WrongArity("function expected %d arguments but got %d" % (len(function.params), len(args)))
		scope = function.env.child()
		for name, value in bindings.items(): scope.bind_parameter(name, value)
		for name, value in zip(function.params, args): scope.bind_parameter(name, value)
		self.stack.push(function.path, function.name or "<anonymous>")
		try:
			result = self.visit(function.body, scope)
			if isinstance(result, Signal): return self._stray(result)
		finally:
			self.stack.pop()
		if isinstance(result, Return): return result.value
		if isinstance(result, errors.Error): return result
		return NULL

	def construct(self, cls:Class, args:Sequence[Value]) -> Value:
		instance = Instance(cls)
		init = cls.find_method("__init__")
		want = 0 if init is None else len(init.params)
		if len(args) != want:
			return errors.wrong_arity_for("__init__", len(args), want)
		if init is not None:
			result = self._call(init, args, self._receiver("this", instance, init))
			if isinstance(result, errors.Error): return result
		return instance.ready() or instance

	def iterate(self, subject:Value):
		""" Answers an iterator of tuples, or else an error. """
		steps = subject.iterate()
		if steps is not None: return steps
		if isinstance(subject, Instance):
			method = subject.cls.find_method("__iter__")
			if method is not None:
				produced = self._call(method, (), self._receiver("this", subject, method))
				if isinstance(produced, errors.Error): return produced
				return self.iterate(produced)
		return errors.NotIterable("'%s' object is not iterable" % subject.label())

def binary_operation(op:str, lhs:Value, rhs:Value) -> Value:
	""" Dispatch on the pair of operand types, not on either operand alone. """
	if isinstance(lhs, Integer) and isinstance(rhs, Integer):
		if op in INTEGER_BINARY: return INTEGER_BINARY[op](lhs.value, rhs.value)
	elif isinstance(lhs, String) and isinstance(rhs, String):
		if op == "+": return String(lhs.value + rhs.value)
	if op == "==": return boolean(equal(lhs, rhs))
	if op == "!=": return boolean(not equal(lhs, rhs))
	return errors.unsupported_operand(op, lhs, rhs)
