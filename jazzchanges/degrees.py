"""Scale degree and mode vocabulary.

Degrees are Roman-numeral positions relative to the key centre. Case marks the
usual chord quality (``"ii"`` is minor, ``"II"`` is the secondary dominant
V/V) and a ``b``/``#`` prefix marks chromatic and borrowed degrees. Both enums
subclass ``str`` so members compare and hash equal to their tokens.
"""

import enum
import typing


class Mode (str, enum.Enum):

	"""Key mode."""

	MAJOR = "major"
	MINOR = "minor"


	def flipped (self) -> "Mode":

		"""Return the other mode (major ↔ minor)."""

		return Mode.MINOR if self is Mode.MAJOR else Mode.MAJOR


	@classmethod
	def parse (cls, token: str) -> typing.Optional["Mode"]:

		"""Return the mode named by ``token`` (case-insensitive), or ``None``."""

		lowered = token.strip().lower()

		for mode in cls:
			if mode.value == lowered:
				return mode

		return None


	def __str__ (self) -> str:

		return self.value


class Degree (str, enum.Enum):

	"""Closed vocabulary of scale degrees used by the transition tables."""

	# Diatonic
	I = "I"
	ii = "ii"
	iii = "iii"
	IV = "IV"
	V = "V"
	vi = "vi"
	vii = "vii"

	# Borrowed and chromatic
	FLAT_II = "bII"
	FLAT_III = "bIII"
	FLAT_VI = "bVI"
	FLAT_VII = "bVII"
	iv = "iv"
	v = "v"

	# Secondary dominants
	II = "II"
	III = "III"
	VI = "VI"
	SHARP_IV = "#IV"


	@classmethod
	def parse (cls, token: str) -> typing.Optional["Degree"]:

		"""Return the degree for an exact token (``"bVII"``, ``"vi"``), or ``None``."""

		try:
			return cls(token)
		except ValueError:
			return None


	def __str__ (self) -> str:

		return self.value


TONIC = Degree.I


# Semitones above the tonic, major-scale shape. Minor-key tokens resolve
# through the same table once lowercase numerals are raised to uppercase.
DEGREE_INTERVALS: typing.Dict[str, int] = {
	"I": 0,
	"bII": 1,
	"II": 2,
	"bIII": 3,
	"III": 4,
	"IV": 5,
	"bV": 6,
	"V": 7,
	"bVI": 8,
	"VI": 9,
	"bVII": 10,
	"VII": 11,
}


def _raise_numeral (token: str) -> str:

	"""Uppercase the Roman-numeral letters only, keeping ``b``/``#`` prefixes."""

	return "".join(c.upper() if c in "iv" else c for c in token)


def degree_interval (degree: str) -> int:

	"""Return the semitone interval from the tonic for a degree token.

	A leading ``#`` raises the named base degree by one semitone. Unknown
	tokens resolve to 0 (the tonic).

	Example:
		```python
		degree_interval("ii")    # → 2
		degree_interval("bVII")  # → 10
		degree_interval("#IV")   # → 6
		degree_interval("xyz")   # → 0
		```
	"""

	normalized = _raise_numeral(str(degree))

	if normalized.startswith("#"):
		base = DEGREE_INTERVALS.get(normalized[1:], 0)
		return (base + 1) % 12

	return DEGREE_INTERVALS.get(normalized, 0)
