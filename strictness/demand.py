"""
Which parameters does each function certainly demand?

This drives the abstract semantics over a whole program. For each function
and each parameter, it asks the fixed-point solver what the function makes of
an undefined value in that position while everything else is defined.
If the answer is ZERO, the function is strict in that parameter.

To make that question answerable, each body is rewritten first:
calls to itself become memo-reads, and calls to other functions become
fixed-point calls in their own right. That works for any function which
recurses only on itself. A ring of functions which call each other cannot
share one argument-keyed memo table without confusing their results, so such
rings get reported and summarized as strict in nothing. Calls into a ring
are likewise treated as "might be anything".

Like any demand analysis, this may underestimate. It must never overestimate.
"""
from typing import Iterable, Optional, Mapping
from boozetools.support.foundation import Visitor, strongly_connected_components_hashable
from . import syntax
from .abstract import evaluate_abstract_program, analyze, PHI
from .diagnostics import Report
from .domain import Two, ZERO, ONE, DOMAIN, BOTTOM
from .fixpoint import evaluate_with_fpi
from .rewrite import CallRewriter

STRICTURE = tuple[bool, ...]

# Abstractly ONE whatever the arguments. Makes no claim either way.
_UNKNOWN = syntax.Const(0)

class CallGraphPass(Visitor):
	""" Which defined functions does each function mention in its body? """
	graph : dict[str, set[str]]

	def __init__(self, udfs:Mapping[str, syntax.FunDef]):
		self.graph = {}
		self._defined = udfs.keys()
		for name, udf in udfs.items():
			self.graph[name] = set()
			self.visit(udf.body, name)

	def visit_Const(self, expr:syntax.Const, src): pass
	def visit_Var(self, expr:syntax.Var, src): pass

	def visit_If(self, expr:syntax.If, src):
		self.visit(expr.cond, src)
		self.visit(expr.then_part, src)
		self.visit(expr.else_part, src)

	def visit_BasicFn(self, expr:syntax.BasicFn, src):
		for a in expr.args:
			self.visit(a, src)

	def visit_Call(self, expr:syntax.Application, src):
		if expr.name in self._defined:
			self.graph[src].add(expr.name)
		for a in expr.args:
			self.visit(a, src)

	visit_MemoCall = visit_Call
	visit_FPICall = visit_Call


class DemandAnalysis:
	"""
	Holds one program prepared for fixed-point analysis:
	every body rewritten as described above, and an abstract table built from those.
	"""
	udfs: dict[str, syntax.FunDef]
	ring: set[str]
	aphi: PHI

	def __init__(self, defs:Iterable[syntax.FunDef], report:Report):
		self.udfs = {udf.name: udf for udf in defs}  # Later definitions win.
		self.ring = set()
		for component in strongly_connected_components_hashable(CallGraphPass(self.udfs).graph):
			if len(component) > 1:
				report.mutual_recursion(component)
				self.ring.update(component)
		self.aphi = evaluate_abstract_program(
			syntax.FunDef(udf.name, udf.params, self.rewrite(udf.body, udf.name))
			for udf in self.udfs.values()
		)

	def rewrite(self, expr:syntax.Exp, inside:Optional[str]=None) -> syntax.Exp:
		""" Prepare an expression found in the body of the function called `inside`, if any. """
		def retarget(call:syntax.Call) -> syntax.Exp:
			args = [rewriter.visit(a) for a in call.args]
			if call.name in self.ring: return _UNKNOWN
			if call.name == inside: return syntax.MemoCall(call.name, args)
			if call.name in self.udfs: return syntax.FPICall(call.name, args)
			return syntax.Call(call.name, args)
		rewriter = CallRewriter(retarget)
		return rewriter.visit(expr)

	def stricture(self, name:str) -> STRICTURE:
		arity = self.udfs[name].arity()
		if name in self.ring: return (False,) * arity
		def probe(i):
			args = [ONE] * arity
			args[i] = ZERO
			return evaluate_with_fpi(self.aphi[name], args, DOMAIN, BOTTOM) is ZERO
		return tuple(probe(i) for i in range(arity))

	def query(self, expr:syntax.Exp, env:Mapping[str, Two]) -> Two:
		""" Abstract value of a top-level expression, with recursion tamed by the solver. """
		return analyze(self.rewrite(expr), self.aphi, env)


def analyze_demand(defs:Iterable[syntax.FunDef], report:Report) -> dict[str, STRICTURE]:
	analysis = DemandAnalysis(defs, report)
	summary = {}
	for name, udf in analysis.udfs.items():
		summary[name] = analysis.stricture(name)
		report.info(render_signature(udf, summary[name]))
	return summary

def render_signature(udf:syntax.FunDef, stricture:STRICTURE) -> str:
	""" Like f(n!, acc) where the bang marks a strict parameter. """
	params = [p + ("!" if s else "") for p, s in zip(udf.params, stricture)]
	return "%s(%s)" % (udf.name, ", ".join(params))
