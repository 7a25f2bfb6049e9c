"""
The Two-Point Domain
=====================

Abstract values for strictness analysis. There are exactly two:

* ZERO stands for "certainly undefined" and is the bottom of the lattice.
* ONE stands for "possibly defined" and is the top.

If a function of some argument produces ZERO when that argument is ZERO,
then the function is strict in that argument.

The concrete values are Optional[int], with None for the undefined value.
"""
from typing import Optional, Mapping

class Two:
	""" Don't make more of these. There are only ever the two below. """
	def __init__(self, rank:int, name:str):
		self.rank, self.name = rank, name
	def __repr__(self): return self.name
	def __le__(self, other:"Two") -> bool: return leq(self, other)
	def __and__(self, other:"Two") -> "Two": return meet(self, other)
	def __or__(self, other:"Two") -> "Two": return join(self, other)
	def __reduce__(self): return self.name

ZERO = Two(0, "ZERO")
ONE = Two(1, "ONE")

DOMAIN = (ZERO, ONE)
BOTTOM = ZERO

def meet(a:Two, b:Two) -> Two:
	return ZERO if a is ZERO or b is ZERO else ONE

def join(a:Two, b:Two) -> Two:
	return ONE if a is ONE or b is ONE else ZERO

def leq(a:Two, b:Two) -> bool:
	return a is ZERO or b is ONE

def alpha(d:Optional[int]) -> Two:
	""" The abstraction map from concrete values. """
	return ZERO if d is None else ONE

def alpha_env(env:Mapping[str, Optional[int]]) -> dict[str, Two]:
	return {k: alpha(v) for k, v in env.items()}
