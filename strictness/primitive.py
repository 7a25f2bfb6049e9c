"""
The built-in operators.

Every one of these is strict in every argument, but that part is
the evaluator's business: by the time an operator here gets called,
all of its arguments are known to be defined integers.
"""
import operator
from typing import Sequence

class ArityError(Exception):
	""" A built-in got fewer arguments than it needs. """
	def __init__(self, name:str, needed:int, given:int):
		super().__init__("%s needs %d arguments; got %d." % (name, needed, given))
		self.name, self.needed, self.given = name, needed, given

def _binary(name:str, fn):
	def apply(args:Sequence[int]) -> int:
		# Extra arguments are ignored, same as ever.
		if len(args) < 2: raise ArityError(name, 2, len(args))
		return fn(args[0], args[1])
	apply.__name__ = name
	return apply

def _flag(relation):
	return lambda x, y: 1 if relation(x, y) else 0

OPS = {
	name: _binary(name, fn)
	for name, fn in [
		("add", operator.add),
		("sub", operator.sub),
		("mul", operator.mul),
		("eq", _flag(operator.eq)),
		("geq", _flag(operator.ge)),
	]
}
