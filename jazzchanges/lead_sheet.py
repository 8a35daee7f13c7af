"""Plain-text lead sheet for generated bars.

Bars are laid out in rows (four per row by default), each cell holding the
bar's chord names. A key marker line precedes any row containing a bar that
changed key::

	Key: Eb major
	|  1 Eb-7 Ab7       |  2 DbΔ7           |  3 C-7            |  4 F7             |
	[Key: Gb major at bar 6]
	|  5 Bb7♭9          |  6 GbΔ9           |  7 Ab-7  Db7      |  8 GbΔ7           |
"""

import typing

import jazzchanges.engine


DEFAULT_BARS_PER_ROW = 4
_CELL_WIDTH = 18


def format_bar (bar: jazzchanges.engine.Bar) -> str:

	"""Return the chord names of a bar separated by two spaces (e.g. ``"D-7  G7"``)."""

	return "  ".join(chord.name() for chord in bar.chords)


def format_degrees (bar: jazzchanges.engine.Bar) -> str:

	"""Return the Roman numerals of a bar (e.g. ``"ii  V"``)."""

	return "  ".join(chord.degree for chord in bar.chords)


def _format_cell (bar: jazzchanges.engine.Bar) -> str:

	return f" {bar.number:>2} {format_bar(bar)}"


def _format_degree_cell (bar: jazzchanges.engine.Bar) -> str:

	return f"    {format_degrees(bar)}"


def format_rows (
	bars: typing.Sequence[jazzchanges.engine.Bar],
	bars_per_row: int = DEFAULT_BARS_PER_ROW,
	show_degrees: bool = False
) -> typing.List[str]:

	"""Lay bars out as lead-sheet lines.

	Parameters:
		bars: Bars in playing order.
		bars_per_row: Bars per line (at least 1).
		show_degrees: Add a line of Roman numerals under each row.

	Returns:
		Lines of text, starting with the opening key.
	"""

	if bars_per_row < 1:
		raise ValueError("Bars per row must be at least 1")

	if not bars:
		return []

	# Every cell shares one width so the bar lines stay in columns.
	width = max([_CELL_WIDTH] + [len(_format_cell(bar)) + 1 for bar in bars])

	if show_degrees:
		width = max([width] + [len(_format_degree_cell(bar)) + 1 for bar in bars])

	lines: typing.List[str] = [f"Key: {bars[0].key}"]

	for start in range(0, len(bars), bars_per_row):

		row = bars[start:start + bars_per_row]

		for bar in row:
			if bar.key_changed:
				lines.append(f"[Key: {bar.key} at bar {bar.number}]")

		lines.append("|" + "|".join(_format_cell(bar).ljust(width) for bar in row) + "|")

		if show_degrees:
			lines.append("|" + "|".join(_format_degree_cell(bar).ljust(width) for bar in row) + "|")

	return lines


def render (bars: typing.Sequence[jazzchanges.engine.Bar], bars_per_row: int = DEFAULT_BARS_PER_ROW, show_degrees: bool = False) -> str:

	"""Return the lead sheet as a single string."""

	return "\n".join(format_rows(bars, bars_per_row=bars_per_row, show_degrees=show_degrees))
