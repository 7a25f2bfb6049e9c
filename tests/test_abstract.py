import itertools
import unittest

from strictness.syntax import Const, Var, If, BasicFn, Call, MemoCall, FPICall, FunDef
from strictness.abstract import evaluate_abstract, evaluate_abstract_program, analyze, EMPTY_MEMO
from strictness.concrete import evaluate, evaluate_program
from strictness.domain import ZERO, ONE, DOMAIN, alpha, alpha_env
from strictness.primitive import OPS
from strictness.rewrite import transform_with_memo

def minus_one(e): return BasicFn("sub", [e, Const(1)])
def is_zero(e): return BasicFn("eq", [e, Const(0)])

COUNTDOWN = FunDef("f", ["n"], If(is_zero(Var("n")), Const(1), Call("f", [minus_one(Var("n"))])))

HELPERS = [
	FunDef("first", ["a", "b"], Var("a")),
	FunDef("pick", ["a", "b"], If(is_zero(Var("a")), Var("b"), Const(1))),
	FunDef("both", ["a", "b"], If(Var("a"), Var("b"), BasicFn("add", [Var("b"), Const(1)]))),
	FunDef("twice", ["a"], Call("both", [Var("a"), Var("a")])),
]

NO_FUNCTIONS = evaluate_abstract_program([])

class BasicForms(unittest.TestCase):

	def test_const_is_one(self):
		self.assertIs(ONE, analyze(Const(0), NO_FUNCTIONS, {}))

	def test_var(self):
		self.assertIs(ONE, analyze(Var("x"), NO_FUNCTIONS, {"x": ONE}))
		self.assertIs(ZERO, analyze(Var("x"), NO_FUNCTIONS, {"x": ZERO}))
		self.assertIs(ZERO, analyze(Var("x"), NO_FUNCTIONS, {}))

	def test_conditional_is_test_meet_join_of_branches(self):
		sut = If(Var("c"), Var("t"), Var("e"))
		for c, t, e in itertools.product(DOMAIN, repeat=3):
			with self.subTest(c=c, t=t, e=e):
				expect = c & (t | e)
				self.assertIs(expect, analyze(sut, NO_FUNCTIONS, {"c": c, "t": t, "e": e}))

	def test_built_ins_meet_their_arguments(self):
		for name in OPS:
			for x, y in itertools.product(DOMAIN, repeat=2):
				with self.subTest(name=name, x=x, y=y):
					self.assertIs(x & y, analyze(BasicFn(name, [Var("x"), Var("y")]), NO_FUNCTIONS, {"x": x, "y": y}))

	def test_built_ins_with_odd_numbers_of_arguments(self):
		# No arity check in the abstract: the meet just starts from ONE.
		self.assertIs(ONE, analyze(BasicFn("add", []), NO_FUNCTIONS, {}))
		self.assertIs(ZERO, analyze(BasicFn("add", [Const(1), Const(2), Var("nope")]), NO_FUNCTIONS, {}))

	def test_unknown_built_in(self):
		self.assertIs(ZERO, analyze(BasicFn("div", [Const(1), Const(2)]), NO_FUNCTIONS, {}))


class CallForms(unittest.TestCase):

	def setUp(self) -> None:
		self.aphi = evaluate_abstract_program(HELPERS + [
			FunDef("echo", ["a"], MemoCall("echo", [Var("a")])),
			FunDef("f", COUNTDOWN.params, transform_with_memo(COUNTDOWN.body)),
		])

	def test_plain_call(self):
		self.assertIs(ONE, analyze(Call("first", [Const(1), Var("nope")]), self.aphi, {}))
		self.assertIs(ZERO, analyze(Call("first", [Var("nope"), Const(1)]), self.aphi, {}))
		self.assertIs(ZERO, analyze(Call("twice", [Var("nope")]), self.aphi, {}))
		self.assertIs(ONE, analyze(Call("pick", [Const(1), Var("nope")]), self.aphi, {}))

	def test_unknown_function_is_zero_in_every_call_form(self):
		memo = {(ONE,): ONE}
		for ctor in (Call, MemoCall, FPICall):
			with self.subTest(ctor.__name__):
				self.assertIs(ZERO, evaluate_abstract(ctor("mystery", [Const(5)]), memo, self.aphi, {}))

	def test_memo_call_reads_nothing_from_an_empty_table(self):
		for args in itertools.product(DOMAIN, repeat=2):
			with self.subTest(args):
				env = {"x": args[0], "y": args[1]}
				self.assertIs(ZERO, evaluate_abstract(MemoCall("first", [Var("x"), Var("y")]), EMPTY_MEMO, self.aphi, env))

	def test_memo_call_reads_the_callers_table(self):
		memo = {(ONE,): ONE}
		self.assertIs(ONE, evaluate_abstract(MemoCall("echo", [Const(5)]), memo, self.aphi, {}))
		self.assertIs(ZERO, evaluate_abstract(MemoCall("echo", [Var("nope")]), memo, self.aphi, {}))

	def test_plain_call_starts_the_callee_with_an_empty_memo(self):
		memo = {(ONE,): ONE}
		self.assertIs(ZERO, evaluate_abstract(Call("echo", [Const(5)]), memo, self.aphi, {}))
		self.assertIs(ONE, self.aphi["echo"]([ONE], memo))

	def test_fixed_point_call(self):
		self.assertIs(ONE, analyze(FPICall("f", [Const(3)]), self.aphi, {}))
		self.assertIs(ZERO, analyze(FPICall("f", [Var("n")]), self.aphi, {"n": ZERO}))

	def test_table_sees_later_definitions(self):
		aphi = evaluate_abstract_program([
			FunDef("outer", ["a"], Call("inner", [Var("a")])),
			FunDef("inner", ["a"], BasicFn("add", [Var("a"), Const(1)])),
		])
		self.assertIs(ONE, aphi["outer"]([ONE], EMPTY_MEMO))
		self.assertIs(ZERO, aphi["outer"]([ZERO], EMPTY_MEMO))

	def test_later_definition_wins(self):
		aphi = evaluate_abstract_program([FunDef("k", ["a"], Const(1)), FunDef("k", ["a"], Var("a"))])
		self.assertIs(ZERO, analyze(Call("k", [Var("nope")]), aphi, {}))


# Samples whose definedness the abstract semantics pins down exactly.
EXACT = [
	Var("x"),
	Var("z"),
	Const(3),
	BasicFn("add", [Var("x"), Var("y")]),
	BasicFn("geq", [Var("x"), Const(1)]),
	If(Var("x"), Var("y"), Var("y")),
	If(is_zero(Var("x")), BasicFn("add", [Var("x"), Var("y")]), BasicFn("mul", [Var("y"), Const(2)])),
	If(Var("z"), Const(1), Const(2)),
	Call("first", [Var("x"), Var("y")]),
	Call("first", [Var("y"), Var("x")]),
	Call("both", [Var("x"), Var("y")]),
	Call("twice", [minus_one(Var("x"))]),
	Call("missing", [Var("x")]),
]

# Only one branch runs, so here the abstract semantics can only say "maybe".
APPROXIMATE = [
	If(Var("x"), Var("y"), Const(1)),
	Call("pick", [Var("x"), Var("y")]),
]

ENVIRONMENTS = [{"x": x, "y": y} for x, y in itertools.product([None, 0, 1, 2], repeat=2)]

class Soundness(unittest.TestCase):

	def setUp(self) -> None:
		self.phi = evaluate_program(HELPERS)
		self.aphi = evaluate_abstract_program(HELPERS)

	def _both(self, expr, env):
		return evaluate(expr, self.phi, env), analyze(expr, self.aphi, alpha_env(env))

	def test_abstract_never_claims_undefined_wrongly(self):
		for expr in EXACT + APPROXIMATE:
			for env in ENVIRONMENTS:
				with self.subTest(expr=expr, env=env):
					concrete, abstract = self._both(expr, env)
					self.assertTrue(alpha(concrete) <= abstract)

	def test_strict_contexts_are_caught(self):
		for expr in EXACT:
			for env in ENVIRONMENTS:
				with self.subTest(expr=expr, env=env):
					concrete, abstract = self._both(expr, env)
					if concrete is None:
						self.assertIs(ZERO, abstract)

	def test_one_branch_undefined_is_only_a_maybe(self):
		concrete, abstract = self._both(If(Var("x"), Var("y"), Const(1)), {"x": 1, "y": None})
		self.assertIsNone(concrete)
		self.assertIs(ONE, abstract)


if __name__ == '__main__':
	unittest.main()
