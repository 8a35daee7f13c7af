import dataclasses
import math
import numbers
import typing


@dataclasses.dataclass
class Settings:

	"""
	Engine tuning, every field in the range 0.0 to 1.0.

	Parameters:
		key_stability: Resistance to modulation. The per-chord chance of a key
			change is ``1 - key_stability`` (doubled right after a tonic).
		adventurousness: Blend of each transition row toward uniform.
		complexity: How far into the extended/altered quality options the
			realizer may reach.
		two_chord_probability: Chance that a bar holds two chords instead of one.
	"""

	key_stability: float = 0.85
	adventurousness: float = 0.30
	complexity: float = 0.50
	two_chord_probability: float = 0.15


	def __post_init__ (self) -> None:

		self.validate()


	def validate (self) -> None:

		"""Raise if any field is non-numeric, non-finite or outside 0..1."""

		for field in dataclasses.fields(self):

			value = getattr(self, field.name)

			if isinstance(value, bool) or not isinstance(value, numbers.Real):
				raise TypeError(f"{_label(field.name)} must be a number, got {value!r}")

			if not math.isfinite(value) or value < 0 or value > 1:
				raise ValueError(f"{_label(field.name)} must be between 0 and 1")


	def merged (self, changes: typing.Mapping[str, float]) -> "Settings":

		"""Return a validated copy with ``changes`` applied.

		Raises:
			ValueError: For unknown setting names or out-of-range values.
			TypeError: For non-numeric values.
		"""

		known = {field.name for field in dataclasses.fields(self)}
		unknown = sorted(set(changes) - known)

		if unknown:
			raise ValueError(f"Unknown setting(s): {', '.join(unknown)}. Available: {', '.join(sorted(known))}")

		return dataclasses.replace(self, **changes)


def _label (field_name: str) -> str:

	"""Turn ``key_stability`` into ``Key stability`` for error messages."""

	return field_name.replace("_", " ").capitalize()
