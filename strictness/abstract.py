"""
The abstract semantics: the same programs, evaluated over the two-point domain.

Read every result as an answer to "is this certainly undefined?"
ZERO means yes. ONE means "not necessarily". An abstract value must never
claim ZERO where the standard semantics might produce a number.

Function denotations here take a memo table alongside their arguments.
There are three ways to call one, and they really do differ:

* A plain Call evaluates the callee's body with a fresh, empty memo table.
* A MemoCall never runs the callee at all. It just reads the caller's memo table
  at the tuple of abstract arguments, with ZERO for anything not found there.
  That's the hook that lets a recursive body be iterated to a fixed point.
* An FPICall hands the callee to the fixed-point solver.

Only the solver ever writes memo entries.
"""
from types import MappingProxyType
from typing import Mapping, Sequence, Iterable
from boozetools.support.foundation import Visitor
from . import syntax, primitive
from .domain import Two, ZERO, ONE, DOMAIN, BOTTOM, meet, join
from .fixpoint import evaluate_with_fpi

MEMO = Mapping[tuple[Two, ...], Two]
ENV = Mapping[str, Two]
PHI = Mapping[str, "Closure"]

EMPTY_MEMO : MEMO = MappingProxyType({})

class AbstractEvaluator(Visitor):
	""" Walks one expression against one function table. Environment and memo travel as arguments. """
	def __init__(self, phi:PHI):
		self._phi = phi

	def _each(self, args:Sequence[syntax.Exp], memo:MEMO, env:ENV) -> list[Two]:
		return [self.visit(a, memo, env) for a in args]

	@staticmethod
	def visit_Const(_expr:syntax.Const, _memo, _env): return ONE

	@staticmethod
	def visit_Var(expr:syntax.Var, _memo, env:ENV):
		return env.get(expr.name, ZERO)

	def visit_If(self, expr:syntax.If, memo:MEMO, env:ENV):
		if_part = self.visit(expr.cond, memo, env)
		then_part = self.visit(expr.then_part, memo, env)
		else_part = self.visit(expr.else_part, memo, env)
		# Strict in whatever the test is strict in, and in whatever both branches are.
		return meet(if_part, join(then_part, else_part))

	def visit_BasicFn(self, expr:syntax.BasicFn, memo:MEMO, env:ENV):
		if expr.name not in primitive.OPS: return ZERO
		result = ONE
		for a in self._each(expr.args, memo, env):
			result = meet(result, a)
		return result

	def visit_Call(self, expr:syntax.Call, memo:MEMO, env:ENV):
		try: fn = self._phi[expr.name]
		except KeyError: return ZERO
		return fn(self._each(expr.args, memo, env), EMPTY_MEMO)

	def visit_MemoCall(self, expr:syntax.MemoCall, memo:MEMO, env:ENV):
		if expr.name not in self._phi: return ZERO
		key = tuple(self._each(expr.args, memo, env))
		return memo.get(key, ZERO)

	def visit_FPICall(self, expr:syntax.FPICall, memo:MEMO, env:ENV):
		try: fn = self._phi[expr.name]
		except KeyError: return ZERO
		return evaluate_with_fpi(fn, self._each(expr.args, memo, env), DOMAIN, BOTTOM)


def evaluate_abstract(expr:syntax.Exp, memo:MEMO, phi:PHI, env:ENV) -> Two:
	return AbstractEvaluator(phi).visit(expr, memo, env)

def analyze(expr:syntax.Exp, phi:PHI, env:ENV) -> Two:
	""" For queries from outside: start with nothing memorized. """
	return evaluate_abstract(expr, EMPTY_MEMO, phi, env)

class Closure:
	""" Abstract counterpart to concrete.Closure, and tied to its table the same way. """
	def __init__(self, udf:syntax.FunDef, phi:PHI):
		self._udf = udf
		self._phi = phi

	def __call__(self, args:Sequence[Two], memo:MEMO) -> Two:
		frame = dict(zip(self._udf.params, args))
		return evaluate_abstract(self._udf.body, memo, self._phi, frame)

	def __repr__(self): return "<Abstract %s/%d>" % (self._udf.name, self._udf.arity())

def evaluate_abstract_program(defs:Iterable[syntax.FunDef]) -> PHI:
	phi = {}
	for udf in defs:
		phi[udf.name] = Closure(udf, phi)
	return MappingProxyType(phi)
