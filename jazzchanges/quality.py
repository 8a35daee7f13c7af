"""Chord realization: scale degree → concrete chord.

The realizer places the degree's root against the key, classifies the degree
into a harmonic function and draws a quality from that function's option
list. Each list runs from the plainest voicing to the most extended or
altered, and ``complexity`` widens how far down the list the draw may reach
(index 0 always stays reachable).

Dominant-function chords look ahead: when the following degree is known (or
predicted), a dominant heading for a minor-quality target takes a darker,
altered colour while one heading for a major target takes brighter
extensions.
"""

import enum
import math
import random
import typing

import jazzchanges.chords
import jazzchanges.degrees
import jazzchanges.key_center


class Function (str, enum.Enum):

	"""Harmonic categories, listed in classification priority order."""

	SECONDARY_DOMINANT = "secondary_dominant"
	TRITONE_SUBSTITUTE = "tritone_substitute"
	BORROWED = "borrowed"
	MINOR_SUBDOMINANT = "minor_subdominant"
	HALF_DIMINISHED = "half_diminished"
	DOMINANT = "dominant"
	MINOR = "minor"
	TONIC = "tonic"
	SUBDOMINANT = "subdominant"
	OTHER = "other"


QUALITY_OPTIONS: typing.Dict[str, typing.List[str]] = {
	"tonic": ["maj7", "maj9", "6", "69", "maj7#11"],
	"subdominant": ["maj7", "maj9", "7", "m7", "6"],
	"dominant": ["7", "9", "13", "7#11", "7alt", "7b9", "7#9", "sus4"],
	"dominant_to_minor": ["7", "7b9", "7#9", "7alt"],
	"dominant_to_major": ["7", "9", "13", "7#11", "sus4"],
	"minor": ["m7", "m9", "m11", "m6", "m69"],
	"half_diminished": ["m7b5", "ø7"],
	"diminished": ["dim7", "°7"],
	"tritone_substitute": ["7", "7#11", "9", "13"],
	"borrowed": ["maj7", "7", "maj9"],
	"other": ["7", "maj7", "m7"],
}

SECONDARY_DOMINANTS = frozenset({"II", "III", "VI", "#IV"})
BORROWED_MAJOR = frozenset({"bIII", "bVI", "bVII"})
MINOR_DEGREES = frozenset({"ii", "iii", "vi", "v"})
# Compared against the lowercased token: the minor tonic is spelled "I" in the tables.
MINOR_KEY_MINOR_DEGREES = frozenset({"i", "iv"})
MINOR_TARGETS = frozenset({"ii", "iii", "vi", "iv", "v"})

DOMINANT_FUNCTIONS = frozenset({Function.SECONDARY_DOMINANT, Function.DOMINANT})


def classify (degree: str, minor_key: bool) -> Function:

	"""Return the harmonic function of a degree token in a major or minor key.

	Categories are tested in a fixed order; the first match wins.
	"""

	token = str(degree)

	if token in SECONDARY_DOMINANTS:
		return Function.SECONDARY_DOMINANT

	if token == "bII":
		return Function.TRITONE_SUBSTITUTE

	if token in BORROWED_MAJOR:
		return Function.BORROWED

	if token == "iv":
		return Function.MINOR_SUBDOMINANT

	if token == "vii" or (token == "ii" and minor_key):
		return Function.HALF_DIMINISHED

	if token == "V":
		return Function.DOMINANT

	# In a minor key the tonic and the Dorian IV take minor colours too.
	if token in MINOR_DEGREES or (minor_key and token.lower() in MINOR_KEY_MINOR_DEGREES):
		return Function.MINOR

	if token.upper() == "I":
		return Function.TONIC

	if token.upper() == "IV":
		return Function.SUBDOMINANT

	return Function.OTHER


def _function_options (function: Function, minor_key: bool) -> typing.List[str]:

	"""Return the unmodified option list for a function."""

	if function in DOMINANT_FUNCTIONS:
		return QUALITY_OPTIONS["dominant"]

	if function in (Function.MINOR_SUBDOMINANT, Function.MINOR):
		return QUALITY_OPTIONS["minor"]

	if function is Function.TONIC:
		return QUALITY_OPTIONS["minor"] if minor_key else QUALITY_OPTIONS["tonic"]

	return QUALITY_OPTIONS[function.value]


def resolves_to_minor (next_degree: str, minor_key: bool) -> bool:

	"""Return True when ``next_degree`` is a minor-quality resolution target."""

	token = str(next_degree)

	return token in MINOR_TARGETS or (minor_key and token == "I")


def quality_options (
	degree: str,
	minor_key: bool,
	next_degree_hint: typing.Optional[str] = None
) -> typing.List[str]:

	"""Return the ordered quality options for a degree, with lookahead applied."""

	function = classify(degree, minor_key)

	if function in DOMINANT_FUNCTIONS and next_degree_hint is not None:

		# Decision path: colour the dominant for where it is heading.
		if resolves_to_minor(next_degree_hint, minor_key):
			return QUALITY_OPTIONS["dominant_to_minor"]

		return QUALITY_OPTIONS["dominant_to_major"]

	return _function_options(function, minor_key)


def pick_by_complexity (options: typing.Sequence[str], complexity: float, rng: random.Random) -> str:

	"""Draw an option, reaching further down the list as complexity rises.

	``max_index = floor(1 + (len - 1) * complexity)``; the index is drawn
	uniformly from ``[0, max_index)`` and clamped to the last entry.
	"""

	if not options:
		raise ValueError("Options cannot be empty")

	max_index = math.floor(1 + (len(options) - 1) * complexity)
	index = math.floor(rng.random() * max_index)

	return options[max(0, min(index, len(options) - 1))]


def choose_quality (
	degree: str,
	key: jazzchanges.key_center.Key,
	complexity: float,
	rng: random.Random,
	next_degree_hint: typing.Optional[str] = None
) -> str:

	"""Choose a quality token for ``degree`` in ``key``."""

	options = quality_options(degree, key.is_minor, next_degree_hint)

	return pick_by_complexity(options, complexity, rng)


def chord_root (degree: str, key: jazzchanges.key_center.Key) -> str:

	"""Return the root note name of ``degree`` in ``key``."""

	interval = jazzchanges.degrees.degree_interval(degree)

	return jazzchanges.chords.PC_TO_NOTE_NAME[(key.root_pc + interval) % 12]


def realize_chord (
	degree: str,
	key: jazzchanges.key_center.Key,
	complexity: float,
	rng: random.Random,
	next_degree_hint: typing.Optional[str] = None
) -> jazzchanges.chords.Chord:

	"""Turn a degree into a ``Chord`` in ``key``.

	Parameters:
		degree: Degree token or ``Degree`` member.
		key: Key the degree is read against.
		complexity: 0.0 keeps to plain sevenths, 1.0 opens up the full list.
		rng: Random source for the quality draw.
		next_degree_hint: The degree expected to follow, if known.

	Example:
		```python
		chord = realize_chord("ii", Key("C"), 0.0, rng, next_degree_hint="V")
		chord.root          # → "D"
		chord.quality       # → "m7"
		chord.name()        # → "D-7"
		```
	"""

	root = chord_root(degree, key)
	quality = choose_quality(degree, key, complexity, rng, next_degree_hint)

	return jazzchanges.chords.Chord(
		root=root,
		quality=quality,
		degree=jazzchanges.chords.format_degree(str(degree)),
		display_name=jazzchanges.chords.format_chord_name(root, quality)
	)
