"""
The standard semantics: what a program actually computes.

Values are Optional[int]. None is the undefined value, and it is not an error.
It flows quietly through every strict context until somebody looks at it.
Unknown variables and unknown functions also come out as None.
"""
from types import MappingProxyType
from typing import Optional, Mapping, Sequence, Iterable
from . import syntax, primitive

VALUE = Optional[int]
ENV = Mapping[str, VALUE]
PHI = Mapping[str, "Closure"]

def evaluate(expr:syntax.Exp, phi:PHI, env:ENV) -> VALUE:
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise NotImplementedError(type(expr), expr)
	return fn(expr, phi, env)

def _eval_const(expr:syntax.Const, phi:PHI, env:ENV):
	return expr.value

def _eval_var(expr:syntax.Var, phi:PHI, env:ENV):
	# Absent and bound-to-undefined come to the same thing.
	return env.get(expr.name)

def _eval_if(expr:syntax.If, phi:PHI, env:ENV):
	if_part = evaluate(expr.cond, phi, env)
	if if_part is None: return None
	sequel = expr.else_part if if_part == 0 else expr.then_part
	return evaluate(sequel, phi, env)

def _eval_basic_fn(expr:syntax.BasicFn, phi:PHI, env:ENV):
	try: op = primitive.OPS[expr.name]
	except KeyError: return None
	args = [evaluate(a, phi, env) for a in expr.args]
	if any(a is None for a in args): return None
	return op(args)

def _eval_call(expr:syntax.Call, phi:PHI, env:ENV):
	try: fn = phi[expr.name]
	except KeyError: return None
	return fn([evaluate(a, phi, env) for a in expr.args])

class Closure:
	"""
	The run-time meaning of a user-defined function.

	It holds the very table it is being installed into, not a copy,
	so by the time anyone calls it, it can see itself and all its siblings,
	even those defined after it.
	"""
	def __init__(self, udf:syntax.FunDef, phi:PHI):
		self._udf = udf
		self._phi = phi

	def __call__(self, args:Sequence[VALUE]) -> VALUE:
		frame = dict(zip(self._udf.params, args))
		return evaluate(self._udf.body, self._phi, frame)

	def __repr__(self): return "<Closure %s/%d>" % (self._udf.name, self._udf.arity())

def evaluate_program(defs:Iterable[syntax.FunDef]) -> PHI:
	""" Build the function table. On a name collision, the later definition wins. """
	phi = {}
	for udf in defs:
		phi[udf.name] = Closure(udf, phi)
	return MappingProxyType(phi)


EVALUATE = {}
for _k, _v in list(globals().items()):
	if _k.startswith("_eval_"):
		_t = _v.__annotations__["expr"]
		assert isinstance(_t, type), (_k, _t)
		EVALUATE[_t] = _v
# The other call forms mean something different only in the abstract.
EVALUATE[syntax.MemoCall] = EVALUATE[syntax.FPICall] = _eval_call
