"""
Structure-preserving rewrites of expression trees.

The one that matters turns every plain call into a memoized call, which is how a
function body gets ready for fixed-point iteration: once rewritten, the body reads
its recursive results out of the memo table instead of recursing forever.
"""
from typing import Callable
from boozetools.support.foundation import Visitor
from . import syntax

RETARGET = Callable[[syntax.Call], syntax.Exp]

class CallRewriter(Visitor):
	"""
	Rebuild a tree, replacing each plain Call according to the retarget function.
	Everything else comes back the same shape. The arguments of a call are
	handed over exactly as they were: it is up to retarget whether to go further.
	"""
	def __init__(self, retarget:RETARGET):
		self._retarget = retarget

	@staticmethod
	def visit_Const(expr:syntax.Const): return expr
	@staticmethod
	def visit_Var(expr:syntax.Var): return expr

	def visit_If(self, expr:syntax.If):
		return syntax.If(self.visit(expr.cond), self.visit(expr.then_part), self.visit(expr.else_part))

	def visit_BasicFn(self, expr:syntax.BasicFn):
		return syntax.BasicFn(expr.name, [self.visit(a) for a in expr.args])

	def visit_Call(self, expr:syntax.Call):
		return self._retarget(expr)

	@staticmethod
	def visit_MemoCall(expr:syntax.MemoCall): return expr
	@staticmethod
	def visit_FPICall(expr:syntax.FPICall): return expr


def _memoize(call:syntax.Call) -> syntax.Exp:
	return syntax.MemoCall(call.name, call.args)

_memoizer = CallRewriter(_memoize)

def transform_with_memo(expr:syntax.Exp) -> syntax.Exp:
	""" Every plain Call becomes a MemoCall of the same name and arguments. """
	return _memoizer.visit(expr)
