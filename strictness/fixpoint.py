"""
Least fixed points over a finite domain, by Kleene iteration.

The denotation of a recursive function, once its recursive calls have been
rewritten into memo-reads, is a function of (arguments, memo-table).
The memo table stands in for the function itself. So the solver guesses
bottom for every possible argument tuple, then keeps re-evaluating the body
against the previous guess until the guess stops moving.

With a monotone denotation on a finite domain, that has to happen
in a bounded number of rounds. If it doesn't, the denotation was not monotone.
"""
from itertools import product
from typing import Callable, Sequence, Mapping

class Divergence(Exception):
	""" The iteration outlived any ascending chain, so the denotation cannot be monotone. """

MEMO = Mapping[tuple, object]
DENOTATION = Callable[[Sequence, MEMO], object]

def evaluate_with_fpi(denotation:DENOTATION, args:Sequence, domain:Sequence, bottom):
	"""
	Answer the least-fixed-point value of the denotation at the given arguments.
	Every argument must be a member of the domain.
	"""
	args = tuple(args)
	points = list(product(domain, repeat=len(args)))
	memo = dict.fromkeys(points, bottom)
	# Each productive round must raise at least one point by at least one step.
	limit = len(points) * (len(domain) - 1) + 1
	for _ in range(limit):
		step = {p: denotation(list(p), memo) for p in points}
		if step == memo:
			return memo[args]
		memo = step
	raise Divergence(denotation, args)
