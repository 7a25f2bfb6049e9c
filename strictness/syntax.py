"""
The expression forms of the little first-order language under analysis.
Programs arrive already built from these constructors; there is no parser.

Nodes are value objects: two nodes with the same shape compare equal and hash alike.
That matters for the rewriting pass (so tests can compare trees) and costs nothing here.
"""
from typing import Sequence

class Exp:
	""" Common base for the expression forms. """
	_key: tuple

	def __init__(self, *key):
		self._key = key
	def __hash__(self): return hash((type(self), self._key))
	def __eq__(self, other): return type(self) is type(other) and self._key == other._key
	def __repr__(self): return "%s(%s)" % (type(self).__name__, ", ".join(map(repr, self._key)))

class Const(Exp):
	def __init__(self, value:int):
		assert isinstance(value, int) and not isinstance(value, bool), type(value)
		self.value = value
		super().__init__(value)

class Var(Exp):
	def __init__(self, name:str):
		assert isinstance(name, str), type(name)
		self.name = name
		super().__init__(name)

class If(Exp):
	def __init__(self, cond:Exp, then_part:Exp, else_part:Exp):
		self.cond, self.then_part, self.else_part = cond, then_part, else_part
		super().__init__(cond, then_part, else_part)

class Application(Exp):
	"""
	Anything of the shape "name applied to arguments".
	The subclasses differ only in how the abstract semantics treats them.
	"""
	def __init__(self, name:str, args:Sequence[Exp]):
		assert isinstance(name, str), type(name)
		self.name = name
		self.args = tuple(args)
		for a in self.args: assert isinstance(a, Exp), a
		super().__init__(name, self.args)

class BasicFn(Application):
	""" One of the built-in strict operators; see primitive.OPS """

class Call(Application):
	""" An ordinary call to a user-defined function. """

class MemoCall(Application):
	""" Abstractly, a read from the caller's memo table. Concretely, a call. """

class FPICall(Application):
	""" Abstractly, solved for a least fixed point. Concretely, a call. """


class FunDef:
	""" name, ordered parameter names, and body. Parameter names are assumed distinct. """
	def __init__(self, name:str, params:Sequence[str], body:Exp):
		assert isinstance(body, Exp), body
		self.name = name
		self.params = tuple(params)
		self.body = body

	def arity(self) -> int: return len(self.params)
	def __eq__(self, other):
		return type(other) is FunDef and (self.name, self.params, self.body) == (other.name, other.params, other.body)
	def __hash__(self): return hash((self.name, self.params, self.body))
	def __repr__(self): return "FunDef(%r, %r, %r)" % (self.name, list(self.params), self.body)
