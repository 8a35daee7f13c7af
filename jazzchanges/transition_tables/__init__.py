"""
Degree transition tables and lookups.

Three layers decide which raw distribution the engine samples from:

- **Approach sequences**: fixed three-degree runs (e.g. ii–V–I) queued toward
  a target and played out before anything else is consulted.
- **Second-order overrides**: distributions keyed on ``(previous, current)``
  that fully replace the first-order row when present.
- **First-order tables**: one row per degree, per mode
  (``transition_tables.major`` / ``transition_tables.minor``).

Lookups return ``None`` when a row is absent so that callers state their
fallback order explicitly; ``first_order`` applies the standard chain
(mode table → major table → tonic row).
"""

import dataclasses
import typing

import jazzchanges.degrees
import jazzchanges.distribution
import jazzchanges.transition_tables.major
import jazzchanges.transition_tables.minor


D = jazzchanges.degrees.Degree
_weights = jazzchanges.distribution.make_distribution

DegreeDistribution = typing.Tuple[typing.Tuple[jazzchanges.degrees.Degree, float], ...]

APPROACH_PROBABILITY = 0.12


@dataclasses.dataclass(frozen=True)
class ApproachSequence:

	"""A fixed run of degrees ending on ``target``, chosen with ``weight``."""

	target: jazzchanges.degrees.Degree
	degrees: typing.Tuple[jazzchanges.degrees.Degree, ...]
	weight: float


APPROACH_SEQUENCES: typing.Tuple[ApproachSequence, ...] = (
	ApproachSequence(target=D.I, degrees=(D.ii, D.V, D.I), weight=0.30),      # ii-V-I
	ApproachSequence(target=D.ii, degrees=(D.iii, D.VI, D.ii), weight=0.20),  # iii-VI7-ii
	ApproachSequence(target=D.V, degrees=(D.vi, D.II, D.V), weight=0.30),     # vi-II7-V
	ApproachSequence(target=D.vi, degrees=(D.vii, D.III, D.vi), weight=0.20), # viiø-III7-vi
)


SECOND_ORDER_OVERRIDES: typing.Dict[typing.Tuple[jazzchanges.degrees.Degree, jazzchanges.degrees.Degree], DegreeDistribution] = {
	# ii-V resolves to I
	(D.ii, D.V): _weights([
		(D.I, 0.75), (D.vi, 0.10), (D.FLAT_VI, 0.05), (D.IV, 0.04), (D.iii, 0.03), (D.FLAT_VII, 0.03),
	]),
	# iii-vi continues the cycle toward ii
	(D.iii, D.vi): _weights([
		(D.ii, 0.45), (D.IV, 0.20), (D.V, 0.10), (D.I, 0.08), (D.FLAT_VI, 0.07), (D.iii, 0.05), (D.FLAT_VII, 0.05),
	]),
	# vi-ii continues toward V
	(D.vi, D.ii): _weights([
		(D.V, 0.55), (D.FLAT_II, 0.10), (D.FLAT_VII, 0.07), (D.IV, 0.08), (D.I, 0.08), (D.iii, 0.06), (D.II, 0.06),
	]),
	# V/V resolved
	(D.II, D.V): _weights([
		(D.I, 0.70), (D.vi, 0.12), (D.FLAT_VI, 0.06), (D.IV, 0.05), (D.iii, 0.04), (D.FLAT_VII, 0.03),
	]),
	# V/ii resolved, keep the chain going
	(D.VI, D.ii): _weights([
		(D.V, 0.55), (D.FLAT_II, 0.10), (D.FLAT_VII, 0.07), (D.IV, 0.08), (D.I, 0.08), (D.iii, 0.06), (D.ii, 0.06),
	]),
	# V/vi resolved
	(D.III, D.vi): _weights([
		(D.ii, 0.40), (D.IV, 0.20), (D.V, 0.15), (D.I, 0.08), (D.FLAT_VI, 0.07), (D.iii, 0.05), (D.FLAT_VII, 0.05),
	]),
	(D.IV, D.V): _weights([
		(D.I, 0.55), (D.vi, 0.15), (D.FLAT_VI, 0.10), (D.ii, 0.08), (D.iii, 0.06), (D.FLAT_VII, 0.03), (D.V, 0.03),
	]),
	# Backdoor-style borrowed resolution
	(D.FLAT_VI, D.FLAT_VII): _weights([
		(D.I, 0.50), (D.iv, 0.15), (D.ii, 0.15), (D.V, 0.10), (D.FLAT_VI, 0.05), (D.FLAT_III, 0.05),
	]),
	# Minor iv-V
	(D.iv, D.V): _weights([
		(D.I, 0.70), (D.FLAT_VI, 0.10), (D.iv, 0.06), (D.FLAT_VII, 0.06), (D.ii, 0.04), (D.FLAT_III, 0.04),
	]),
}


def mode_table (mode: jazzchanges.degrees.Mode) -> typing.Dict[jazzchanges.degrees.Degree, DegreeDistribution]:

	"""Return the first-order table for a mode."""

	if mode is jazzchanges.degrees.Mode.MINOR:
		return jazzchanges.transition_tables.minor.TRANSITIONS

	return jazzchanges.transition_tables.major.TRANSITIONS


def second_order (
	previous: typing.Optional[jazzchanges.degrees.Degree],
	current: jazzchanges.degrees.Degree
) -> typing.Optional[DegreeDistribution]:

	"""Return the override for ``previous → current``, or ``None``."""

	if previous is None:
		return None

	return SECOND_ORDER_OVERRIDES.get((previous, current))


def first_order (
	current: jazzchanges.degrees.Degree,
	mode: jazzchanges.degrees.Mode
) -> DegreeDistribution:

	"""Return the first-order row for ``current`` in ``mode``.

	Falls back to the major table when the mode table has no row for the
	degree, and to the tonic row when neither does.
	"""

	row = mode_table(mode).get(current)

	if row is None:
		row = jazzchanges.transition_tables.major.TRANSITIONS.get(current)

	if row is None:
		row = jazzchanges.transition_tables.major.TRANSITIONS[jazzchanges.degrees.TONIC]

	return row


def lookup_transitions (
	previous: typing.Optional[jazzchanges.degrees.Degree],
	current: jazzchanges.degrees.Degree,
	mode: jazzchanges.degrees.Mode
) -> DegreeDistribution:

	"""Return the raw next-degree distribution: override first, then first order."""

	override = second_order(previous, current)

	if override is not None:
		return override

	return first_order(current, mode)


def approach_candidates (current: jazzchanges.degrees.Degree) -> typing.Tuple[typing.Tuple[ApproachSequence, float], ...]:

	"""Return weighted approach sequences, excluding one that targets ``current``."""

	return tuple(
		(sequence, sequence.weight)
		for sequence in APPROACH_SEQUENCES
		if sequence.target != current
	)
