"""Key centres and modulation.

A ``Key`` pairs a flat-normalised root name with a ``Mode``. Modulation moves
the key by a fixed semitone offset chosen from a weighted set of common jazz
key relationships:

=============  ======  =====================================
Type           Weight  Result (from C major)
=============  ======  =====================================
fifth_up       0.25    G major (+7)
fifth_down     0.25    F major (+5)
relative       0.20    A minor (+9, mode flips; +3 from minor)
parallel       0.15    C minor (same root, mode flips)
tritone        0.08    Gb major (+6)
step_up        0.04    D major (+2)
step_down      0.03    Bb major (+10)
=============  ======  =====================================
"""

import dataclasses
import enum
import random
import re
import typing

import jazzchanges.chords
import jazzchanges.degrees


class Modulation (str, enum.Enum):

	"""Kinds of key change."""

	FIFTH_UP = "fifth_up"
	FIFTH_DOWN = "fifth_down"
	RELATIVE = "relative"
	PARALLEL = "parallel"
	TRITONE = "tritone"
	STEP_UP = "step_up"
	STEP_DOWN = "step_down"


KEY_MODULATIONS: typing.Tuple[typing.Tuple[Modulation, float], ...] = (
	(Modulation.FIFTH_UP, 0.25),
	(Modulation.FIFTH_DOWN, 0.25),
	(Modulation.RELATIVE, 0.20),
	(Modulation.PARALLEL, 0.15),
	(Modulation.TRITONE, 0.08),
	(Modulation.STEP_UP, 0.04),
	(Modulation.STEP_DOWN, 0.03),
)

# Root offsets for modulations that keep the mode.
_FIXED_OFFSETS: typing.Dict[Modulation, int] = {
	Modulation.FIFTH_UP: 7,
	Modulation.FIFTH_DOWN: 5,
	Modulation.TRITONE: 6,
	Modulation.STEP_UP: 2,
	Modulation.STEP_DOWN: 10,
}

COMMON_ROOTS: typing.Tuple[str, ...] = ("C", "F", "Bb", "Eb", "Ab", "G", "D", "A")
MAJOR_KEY_PROBABILITY = 0.75

_KEY_PATTERN = re.compile(r"^\s*([A-Ga-g][#b]?)\s*(.*?)\s*$")


@dataclasses.dataclass(frozen=True)
class Key:

	"""
	A key centre: flat-normalised root note name and mode.
	"""

	root: str
	mode: jazzchanges.degrees.Mode = jazzchanges.degrees.Mode.MAJOR


	def __post_init__ (self) -> None:

		# Normalise on construction so that equal keys compare equal.
		object.__setattr__(self, "root", jazzchanges.chords.normalize_note(self.root))

		if not isinstance(self.mode, jazzchanges.degrees.Mode):
			mode = jazzchanges.degrees.Mode.parse(str(self.mode))
			if mode is None:
				raise ValueError(f"Unknown mode: {self.mode!r}. Expected 'major' or 'minor'.")
			object.__setattr__(self, "mode", mode)


	@property
	def root_pc (self) -> int:

		"""Pitch class of the tonic."""

		return jazzchanges.chords.key_name_to_pc(self.root)


	@property
	def is_minor (self) -> bool:

		return self.mode is jazzchanges.degrees.Mode.MINOR


	def transpose (self, semitones: int, mode: typing.Optional[jazzchanges.degrees.Mode] = None) -> "Key":

		"""Return a key ``semitones`` above this one, optionally with a new mode."""

		root = jazzchanges.chords.PC_TO_NOTE_NAME[(self.root_pc + semitones) % 12]

		return Key(root=root, mode=mode if mode is not None else self.mode)


	def name (self) -> str:

		"""Return e.g. ``"Eb major"``."""

		return f"{self.root} {self.mode.value}"


	def __str__ (self) -> str:

		return self.name()


	@classmethod
	def parse (cls, value: typing.Union["Key", str, typing.Tuple[str, str]]) -> "Key":

		"""Build a key from a ``Key``, a ``(root, mode)`` pair or a string.

		Accepted strings: ``"Eb"``, ``"Eb major"``, ``"C minor"``, ``"Cm"``,
		``"F#min"``. A bare root means major.

		Raises:
			ValueError: If the root or mode is not recognised.
		"""

		if isinstance(value, Key):
			return value

		if isinstance(value, tuple):
			root, mode_name = value
			mode = jazzchanges.degrees.Mode.parse(mode_name)
			if mode is None:
				raise ValueError(f"Unknown mode: {mode_name!r}. Expected 'major' or 'minor'.")
			return cls(root=root, mode=mode)

		match = _KEY_PATTERN.match(value)

		if match is None:
			raise ValueError(f"Unknown key: {value!r}. Expected e.g. 'C', 'Eb major', 'F#m'.")

		root = match.group(1)[0].upper() + match.group(1)[1:]
		suffix = match.group(2).lower()

		if suffix in ("", "maj", "major"):
			mode = jazzchanges.degrees.Mode.MAJOR
		elif suffix in ("m", "min", "minor"):
			mode = jazzchanges.degrees.Mode.MINOR
		else:
			raise ValueError(f"Unknown mode in key {value!r}. Expected 'major' or 'minor'.")

		return cls(root=root, mode=mode)


def modulate_key (key: Key, modulation: Modulation) -> Key:

	"""Return the key reached from ``key`` by ``modulation``.

	Example:
		```python
		modulate_key(Key("C"), Modulation.FIFTH_UP)    # → G major
		modulate_key(Key("C"), Modulation.RELATIVE)    # → A minor
		modulate_key(Key("A", Mode.MINOR), Modulation.RELATIVE)  # → C major
		```
	"""

	if modulation is Modulation.RELATIVE:
		offset = 3 if key.is_minor else 9
		return key.transpose(offset, mode=key.mode.flipped())

	if modulation is Modulation.PARALLEL:
		return Key(root=key.root, mode=key.mode.flipped())

	return key.transpose(_FIXED_OFFSETS[modulation])


def random_key (rng: random.Random) -> Key:

	"""Pick a common jazz key, biased toward major."""

	root = rng.choice(COMMON_ROOTS)
	mode = jazzchanges.degrees.Mode.MAJOR if rng.random() < MAJOR_KEY_PROBABILITY else jazzchanges.degrees.Mode.MINOR

	return Key(root=root, mode=mode)
