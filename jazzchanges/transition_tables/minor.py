"""
First-order degree transitions for minor keys.

The tonic keeps the ``I`` token (realized as a minor chord). ``ii`` is the
half-diminished supertonic, ``V`` the harmonic-minor dominant and ``v`` its
natural-minor counterpart. The major-mode degrees bIII, bVI and bVII are
diatonic here and carry much of the motion. Degrees missing from this table
(iii, vii, #IV) fall back to the major-key table.
"""

import typing

import jazzchanges.degrees
import jazzchanges.distribution


D = jazzchanges.degrees.Degree
_weights = jazzchanges.distribution.make_distribution

TRANSITIONS: typing.Dict[jazzchanges.degrees.Degree, "jazzchanges.distribution.Distribution[jazzchanges.degrees.Degree]"] = {
	D.I: _weights([
		(D.iv, 0.22), (D.V, 0.15), (D.FLAT_VII, 0.12), (D.FLAT_VI, 0.12), (D.ii, 0.15),
		(D.FLAT_III, 0.08), (D.v, 0.04), (D.II, 0.05), (D.I, 0.07),
	]),
	D.ii: _weights([
		(D.V, 0.55), (D.FLAT_II, 0.08), (D.FLAT_VII, 0.08), (D.iv, 0.08),
		(D.I, 0.08), (D.FLAT_VI, 0.07), (D.ii, 0.06),
	]),
	D.FLAT_III: _weights([
		(D.FLAT_VI, 0.25), (D.FLAT_VII, 0.25), (D.iv, 0.15), (D.V, 0.10),
		(D.ii, 0.10), (D.I, 0.10), (D.FLAT_III, 0.05),
	]),
	D.iv: _weights([
		(D.V, 0.30), (D.FLAT_VII, 0.15), (D.I, 0.20), (D.FLAT_VI, 0.10),
		(D.ii, 0.10), (D.FLAT_III, 0.08), (D.iv, 0.04), (D.FLAT_II, 0.03),
	]),
	D.v: _weights([
		(D.FLAT_VI, 0.25), (D.FLAT_VII, 0.25), (D.I, 0.20), (D.iv, 0.15),
		(D.FLAT_III, 0.10), (D.v, 0.05),
	]),
	D.V: _weights([
		(D.I, 0.50), (D.FLAT_VI, 0.15), (D.iv, 0.10), (D.FLAT_VII, 0.06),
		(D.FLAT_III, 0.06), (D.V, 0.05), (D.ii, 0.04), (D.FLAT_II, 0.04),
	]),
	D.vi: _weights([  # Dorian borrow, rare
		(D.ii, 0.30), (D.IV, 0.20), (D.V, 0.15), (D.I, 0.15),
		(D.iv, 0.10), (D.FLAT_VII, 0.10),
	]),
	D.FLAT_VI: _weights([
		(D.FLAT_VII, 0.30), (D.V, 0.20), (D.iv, 0.15), (D.ii, 0.12),
		(D.I, 0.10), (D.FLAT_II, 0.05), (D.FLAT_III, 0.08),
	]),
	D.FLAT_VII: _weights([
		(D.I, 0.30), (D.FLAT_III, 0.20), (D.FLAT_VI, 0.15), (D.V, 0.10),
		(D.iv, 0.10), (D.ii, 0.10), (D.FLAT_VII, 0.05),
	]),

	# Chromatic / borrowed
	D.FLAT_II: _weights([
		(D.I, 0.55), (D.V, 0.15), (D.FLAT_VII, 0.10), (D.iv, 0.10), (D.ii, 0.10),
	]),
	D.II: _weights([  # V/V
		(D.V, 0.70), (D.ii, 0.10), (D.FLAT_II, 0.10), (D.I, 0.10),
	]),
	D.III: _weights([  # V/bVI
		(D.FLAT_VI, 0.40), (D.iv, 0.20), (D.FLAT_VII, 0.15), (D.I, 0.10),
		(D.V, 0.10), (D.ii, 0.05),
	]),
	D.VI: _weights([  # V/ii
		(D.ii, 0.70), (D.V, 0.10), (D.iv, 0.10), (D.I, 0.10),
	]),
	D.IV: _weights([  # Dorian IV
		(D.V, 0.25), (D.I, 0.20), (D.ii, 0.15), (D.FLAT_VII, 0.15),
		(D.iv, 0.10), (D.FLAT_VI, 0.10), (D.IV, 0.05),
	]),
}
