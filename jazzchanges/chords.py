"""Chord definitions, pitch class utilities and lead-sheet formatting.

This module provides the note-name tables, the jazz chord quality vocabulary
and the `Chord` class emitted by the engine.

Module-level constants:
- `NOTE_NAME_TO_PC`: Maps note names (e.g., `"C"`, `"F#"`, `"Bb"`) to pitch classes (0-11)
- `PC_TO_NOTE_NAME`: Maps pitch classes to flat-spelled note names
- `CHORD_INTERVALS`: Maps quality tokens to interval lists (semitones from root)
- `QUALITY_DISPLAY_SUBSTITUTIONS`: Ordered typographic substitutions for quality tokens

Module-level helpers:
- `normalize_note(name)`: Spell a note name with the flat-preferring names used for keys.
- `key_name_to_pc(name)`: Validate a note name and return its pitch class.
- `format_degree(degree)` / `format_quality(quality)` / `format_chord_name(root, quality)`.

Quality tokens: `"maj7"`, `"maj9"`, `"6"`, `"69"`, `"maj7#11"`, `"7"`, `"9"`, `"13"`,
`"7#11"`, `"7alt"`, `"7b9"`, `"7#9"`, `"sus4"`, `"m7"`, `"m9"`, `"m11"`, `"m6"`, `"m69"`,
`"m7b5"`, `"ø7"`, `"dim7"`, `"°7"`
"""

import dataclasses
import typing


NOTE_NAME_TO_PC: typing.Dict[str, int] = {
	"C": 0,
	"B#": 0,
	"C#": 1,
	"Db": 1,
	"D": 2,
	"D#": 3,
	"Eb": 3,
	"E": 4,
	"Fb": 4,
	"E#": 5,
	"F": 5,
	"F#": 6,
	"Gb": 6,
	"G": 7,
	"G#": 8,
	"Ab": 8,
	"A": 9,
	"A#": 10,
	"Bb": 10,
	"B": 11,
	"Cb": 11,
}

PC_TO_NOTE_NAME: typing.List[str] = [
	"C",
	"Db",
	"D",
	"Eb",
	"E",
	"F",
	"Gb",
	"G",
	"Ab",
	"A",
	"Bb",
	"B",
]


def key_name_to_pc (key_name: str) -> int:

	"""Validate a note name and return its pitch class (0–11).

	Parameters:
		key_name: Note name (e.g. ``"C"``, ``"F#"``, ``"Bb"``).

	Returns:
		Pitch class integer (0–11).

	Raises:
		ValueError: If the note name is not recognised.

	Example:
		```python
		key_name_to_pc("C")   # → 0
		key_name_to_pc("F#")  # → 6
		key_name_to_pc("Cb")  # → 11
		```
	"""

	if key_name not in NOTE_NAME_TO_PC:
		raise ValueError(
			f"Unknown key name: {key_name!r}. Expected e.g. 'C', 'F#', 'Bb'."
		)

	return NOTE_NAME_TO_PC[key_name]


def normalize_note (note_name: str) -> str:

	"""Return the flat-preferring spelling of a note name (``"F#"`` → ``"Gb"``).

	Raises:
		ValueError: If the note name is not recognised.
	"""

	return PC_TO_NOTE_NAME[key_name_to_pc(note_name)]


# Voicings used for MIDI export. "ø7" and "°7" are display-ready aliases that
# the realizer can emit directly, so they need intervals of their own.
CHORD_INTERVALS: typing.Dict[str, typing.List[int]] = {
	"maj7": [0, 4, 7, 11],
	"maj9": [0, 4, 7, 11, 14],
	"6": [0, 4, 7, 9],
	"69": [0, 4, 7, 9, 14],
	"maj7#11": [0, 4, 7, 11, 18],
	"7": [0, 4, 7, 10],
	"9": [0, 4, 7, 10, 14],
	"13": [0, 4, 10, 14, 21],
	"7#11": [0, 4, 7, 10, 18],
	"7alt": [0, 4, 10, 13, 15, 20],
	"7b9": [0, 4, 7, 10, 13],
	"7#9": [0, 4, 7, 10, 15],
	"sus4": [0, 5, 7, 10],
	"m7": [0, 3, 7, 10],
	"m9": [0, 3, 7, 10, 14],
	"m11": [0, 3, 7, 10, 14, 17],
	"m6": [0, 3, 7, 9],
	"m69": [0, 3, 7, 9, 14],
	"m7b5": [0, 3, 6, 10],
	"ø7": [0, 3, 6, 10],
	"dim7": [0, 3, 6, 9],
	"°7": [0, 3, 6, 9],
}

DEGREE_DISPLAY: typing.Dict[str, str] = {
	"bII": "♭II",
	"bIII": "♭III",
	"bV": "♭V",
	"bVI": "♭VI",
	"bVII": "♭VII",
	"#IV": "♯IV",
}

# Order matters: each rule replaces the first occurrence in the token as it
# stands after the previous rules ran, so "m7b5" must precede "m7".
QUALITY_DISPLAY_SUBSTITUTIONS: typing.List[typing.Tuple[str, str]] = [
	("maj7", "Δ7"),
	("maj9", "Δ9"),
	("m7b5", "ø7"),
	("dim7", "°7"),
	("7#11", "7♯11"),
	("7b9", "7♭9"),
	("7#9", "7♯9"),
	("m7", "-7"),
	("m9", "-9"),
	("m11", "-11"),
	("m6", "-6"),
	("m69", "-6/9"),
	("69", "6/9"),
]


def format_degree (degree: str) -> str:

	"""Return the typographic form of a Roman numeral (``"bII"`` → ``"♭II"``)."""

	return DEGREE_DISPLAY.get(str(degree), str(degree))


def format_quality (quality: str) -> str:

	"""Apply the ordered display substitutions to a raw quality token.

	Example:
		```python
		format_quality("maj7")   # → "Δ7"
		format_quality("m7b5")   # → "ø7"
		format_quality("m69")    # → "-6/9"
		format_quality("7alt")   # → "7alt"
		```
	"""

	display = quality

	for token, replacement in QUALITY_DISPLAY_SUBSTITUTIONS:
		display = display.replace(token, replacement, 1)

	return display


@dataclasses.dataclass(frozen=True)
class ChordName:

	"""
	Human-readable chord name split into root and typographic quality.
	"""

	root: str
	quality: str


	def __str__ (self) -> str:

		return f"{self.root}{self.quality}"


def format_chord_name (root: str, quality: str) -> ChordName:

	"""Return the display name for a chord root and raw quality token."""

	return ChordName(root=root, quality=format_quality(quality))


@dataclasses.dataclass(frozen=True)
class Chord:

	"""
	A realized chord: root note name, raw quality token, typographic Roman
	numeral and display name.
	"""

	root: str
	quality: str
	degree: str
	display_name: ChordName


	@property
	def root_pc (self) -> int:

		"""Pitch class of the chord root."""

		return key_name_to_pc(self.root)


	def intervals (self) -> typing.List[int]:

		"""
		Return the chord intervals for this chord quality.
		"""

		if self.quality not in CHORD_INTERVALS:
			raise ValueError(f"Unknown chord quality: {self.quality}")

		return CHORD_INTERVALS[self.quality]


	def tones (self, root: int) -> typing.List[int]:

		"""Return MIDI note numbers for chord tones around a reference root.

		Finds the MIDI note for the chord's root pitch class that is closest to
		``root`` and stacks the quality's intervals on top of it.

		Parameters:
			root: MIDI note number (e.g., 60 = middle C) to center the chord around.

		Example:
			```python
			chord = realize(...)      # a Dm7 chord
			chord.tones(root=60)      # [62, 65, 69, 72]
			```
		"""

		offset = (self.root_pc - root) % 12
		if offset > 6:
			offset -= 12

		effective_root = root + offset

		return [effective_root + interval for interval in self.intervals()]


	def name (self) -> str:

		"""
		Return the typographic chord name (e.g. ``"Eb-7"``, ``"G7♭9"``).
		"""

		return str(self.display_name)
