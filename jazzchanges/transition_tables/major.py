"""
First-order degree transitions for major keys.

Diatonic motion follows the cycle of fifths (vi → ii → V → I) with strong
ii → V and V → I pulls. Borrowed degrees (bIII, bVI, bVII, iv) drift back
toward the tonic or the subdominant, and each secondary dominant resolves to
its own target most of the time.
"""

import typing

import jazzchanges.degrees
import jazzchanges.distribution


D = jazzchanges.degrees.Degree
_weights = jazzchanges.distribution.make_distribution

TRANSITIONS: typing.Dict[jazzchanges.degrees.Degree, "jazzchanges.distribution.Distribution[jazzchanges.degrees.Degree]"] = {
	D.I: _weights([
		(D.ii, 0.22), (D.IV, 0.18), (D.V, 0.12), (D.vi, 0.15), (D.iii, 0.10),
		(D.FLAT_VII, 0.05), (D.FLAT_III, 0.04), (D.FLAT_VI, 0.04), (D.II, 0.05), (D.I, 0.05),
	]),
	D.ii: _weights([
		(D.V, 0.50), (D.FLAT_II, 0.10), (D.FLAT_VII, 0.08), (D.vi, 0.08),
		(D.iii, 0.06), (D.IV, 0.06), (D.I, 0.07), (D.ii, 0.05),
	]),
	D.iii: _weights([
		(D.vi, 0.35), (D.IV, 0.20), (D.ii, 0.15), (D.FLAT_III, 0.08),
		(D.V, 0.10), (D.I, 0.07), (D.iii, 0.05),
	]),
	D.IV: _weights([
		(D.V, 0.25), (D.I, 0.15), (D.ii, 0.15), (D.iv, 0.10),
		(D.FLAT_VII, 0.10), (D.iii, 0.08), (D.vi, 0.08), (D.IV, 0.04), (D.FLAT_II, 0.05),
	]),
	D.V: _weights([
		(D.I, 0.50), (D.vi, 0.15), (D.IV, 0.08), (D.FLAT_VI, 0.08),
		(D.iii, 0.06), (D.V, 0.05), (D.FLAT_VII, 0.04), (D.ii, 0.04),
	]),
	D.vi: _weights([
		(D.ii, 0.30), (D.IV, 0.20), (D.V, 0.15), (D.iii, 0.10),
		(D.FLAT_VI, 0.08), (D.I, 0.08), (D.vi, 0.04), (D.FLAT_VII, 0.05),
	]),
	D.vii: _weights([
		(D.I, 0.30), (D.iii, 0.25), (D.V, 0.15), (D.vi, 0.10),
		(D.ii, 0.10), (D.IV, 0.10),
	]),

	# Borrowed / chromatic
	D.FLAT_II: _weights([
		(D.I, 0.60), (D.V, 0.15), (D.FLAT_VII, 0.10), (D.ii, 0.10), (D.vi, 0.05),
	]),
	D.FLAT_III: _weights([
		(D.IV, 0.30), (D.FLAT_VII, 0.25), (D.ii, 0.15), (D.vi, 0.10),
		(D.I, 0.10), (D.V, 0.10),
	]),
	D.FLAT_VI: _weights([
		(D.FLAT_VII, 0.30), (D.V, 0.25), (D.ii, 0.15), (D.IV, 0.15),
		(D.I, 0.10), (D.FLAT_II, 0.05),
	]),
	D.FLAT_VII: _weights([
		(D.I, 0.35), (D.IV, 0.20), (D.FLAT_VI, 0.15), (D.V, 0.10),
		(D.ii, 0.10), (D.FLAT_III, 0.10),
	]),
	D.iv: _weights([
		(D.I, 0.25), (D.V, 0.25), (D.FLAT_VII, 0.15), (D.ii, 0.15),
		(D.FLAT_VI, 0.10), (D.IV, 0.10),
	]),

	# Secondary dominants
	D.II: _weights([  # V/V
		(D.V, 0.70), (D.ii, 0.10), (D.FLAT_II, 0.10), (D.I, 0.10),
	]),
	D.III: _weights([  # V/vi
		(D.vi, 0.70), (D.IV, 0.10), (D.ii, 0.10), (D.I, 0.10),
	]),
	D.VI: _weights([  # V/ii
		(D.ii, 0.70), (D.V, 0.10), (D.IV, 0.10), (D.I, 0.10),
	]),
	D.SHARP_IV: _weights([
		(D.V, 0.60), (D.I, 0.20), (D.ii, 0.20),
	]),
}
