import random
import typing

import pytest

import jazzchanges.engine


class ScriptedRandom (random.Random):

	"""Random source that returns scripted values from ``random()`` first.

	Once the script runs out it falls back to a seeded generator, so tests
	can force the branches they care about and let the rest run normally.
	"""

	def __init__ (self, values: typing.Iterable[float], seed: int = 0) -> None:

		super().__init__(seed)
		self._script: typing.List[float] = list(values)
		self.calls = 0


	def random (self) -> float:

		self.calls += 1

		if self._script:
			return self._script.pop(0)

		return super().random()


@pytest.fixture
def scripted_rng () -> typing.Callable[..., ScriptedRandom]:

	"""Factory for scripted random sources."""

	return ScriptedRandom


@pytest.fixture
def engine () -> jazzchanges.engine.MarkovJazzEngine:

	"""A seeded engine in C major that never modulates on its own."""

	return jazzchanges.engine.MarkovJazzEngine(
		settings={"key_stability": 1.0},
		starting_key="C",
		seed=1234
	)
