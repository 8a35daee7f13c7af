"""Probability shaping for degree transitions.

Two independent, composable passes reweight a raw transition distribution
before it is sampled:

1. **Adventurousness** blends every weight toward a uniform share of the
   degrees already present: ``w * (1 - a) + a / n``. At 0 the distribution is
   unchanged; at 1 it is exactly uniform over its own entries.
2. **Anti-repetition** damps degrees that recur in the recent-degree window.
   Three or more occurrences multiply the weight by ``0.3``; exactly two by
   ``0.7``. The pass is skipped until the window holds at least three degrees.

Both functions return new tuples; the shared static tables they read from are
never touched.
"""

import collections
import typing

import jazzchanges.distribution


MIN_HISTORY_FOR_PENALTY = 3
HEAVY_REPEAT_COUNT = 3
HEAVY_REPEAT_FACTOR = 0.3
LIGHT_REPEAT_COUNT = 2
LIGHT_REPEAT_FACTOR = 0.7

StateType = typing.TypeVar("StateType")


def adjust_for_adventurousness (
	options: "jazzchanges.distribution.Distribution[StateType]",
	adventurousness: float
) -> "jazzchanges.distribution.Distribution[StateType]":

	"""Blend a distribution toward uniform over its own entries."""

	if not options:
		return options

	uniform = 1.0 / len(options)

	return tuple(
		(state, weight * (1.0 - adventurousness) + uniform * adventurousness)
		for state, weight in options
	)


def repetition_factor (count: int) -> float:

	"""Return the weight multiplier for a degree seen ``count`` times recently."""

	if count >= HEAVY_REPEAT_COUNT:
		return HEAVY_REPEAT_FACTOR

	if count == LIGHT_REPEAT_COUNT:
		return LIGHT_REPEAT_FACTOR

	return 1.0


def apply_anti_repetition (
	options: "jazzchanges.distribution.Distribution[StateType]",
	recent: typing.Iterable[StateType]
) -> "jazzchanges.distribution.Distribution[StateType]":

	"""Penalise degrees that recur in the recent-degree window."""

	recent_list = list(recent)

	if len(recent_list) < MIN_HISTORY_FOR_PENALTY:
		return options

	counts = collections.Counter(recent_list)

	return tuple(
		(state, weight * repetition_factor(counts.get(state, 0)))
		for state, weight in options
	)


def shape (
	options: "jazzchanges.distribution.Distribution[StateType]",
	adventurousness: float,
	recent: typing.Iterable[StateType]
) -> "jazzchanges.distribution.Distribution[StateType]":

	"""Run both shaping passes in order: adventurousness, then anti-repetition."""

	blended = adjust_for_adventurousness(options, adventurousness)

	return apply_anti_repetition(blended, recent)
