import random
import typing


StateType = typing.TypeVar("StateType")

# An ordered sequence of (state, weight) pairs. Weights are relative and are
# normalised at selection time. Order is significant: it decides ties in
# most_probable() and the fallback in choose_weighted().
Distribution = typing.Tuple[typing.Tuple[StateType, float], ...]


def make_distribution (pairs: typing.Iterable[typing.Tuple[StateType, float]]) -> "Distribution[StateType]":

	"""
	Freeze an iterable of (state, weight) pairs into a distribution.
	"""

	frozen = tuple((state, float(weight)) for state, weight in pairs)

	for _, weight in frozen:
		if weight < 0:
			raise ValueError("Weights cannot be negative")

	return frozen


def total_weight (options: "Distribution[StateType]") -> float:

	"""
	Return the sum of all weights in a distribution.
	"""

	return sum(weight for _, weight in options)


def choose_weighted (options: "Distribution[StateType]", rng: random.Random) -> StateType:

	"""
	Choose one state from a distribution using a cumulative-weight draw.

	A roll in ``[0, total)`` has each weight subtracted in order; the entry that
	brings the remainder to zero or below is chosen. When no entry matches
	(zero-sum weights or floating-point residue) the first entry is returned.
	"""

	if not options:
		raise ValueError("Options cannot be empty")

	remainder = rng.random() * total_weight(options)

	for state, weight in options:
		remainder -= weight
		if remainder <= 0:
			return state

	return options[0][0]


def most_probable (options: "Distribution[StateType]") -> typing.Optional[StateType]:

	"""
	Return the highest-weight state, the first one seen winning ties.

	Returns ``None`` for an empty distribution or one with no positive weight.
	"""

	best: typing.Optional[StateType] = None
	best_weight = 0.0

	for state, weight in options:
		if weight > best_weight:
			best = state
			best_weight = weight

	return best


def as_probabilities (options: "Distribution[StateType]") -> typing.Dict[StateType, float]:

	"""
	Return the distribution normalised to probabilities, keyed by state.
	"""

	total = total_weight(options)

	if total <= 0:
		return {state: 0.0 for state, _ in options}

	return {state: weight / total for state, weight in options}
