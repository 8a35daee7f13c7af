"""The bar-by-bar jazz progression engine.

``MarkovJazzEngine`` walks a probabilistic harmonic model one chord slot at a
time. For each slot it:

1. maybe modulates to a new key centre,
2. picks the next scale degree (queued approach run → second-order override
   → first-order row, shaped by adventurousness and anti-repetition),
3. and, once the bar's degrees are known, realizes each one as a chord using
   the following degree (or the most likely one) as a lookahead hint.

Each engine owns its own state. Build one per progression.

Example:
	```python
	import jazzchanges

	engine = jazzchanges.MarkovJazzEngine(starting_key="Eb", seed=7)
	engine.configure(complexity=0.8)

	for bar in engine.generate_bars(8):
		print(bar.number, [chord.name() for chord in bar.chords])
	```
"""

import collections
import dataclasses
import logging
import random
import typing

import jazzchanges.chords
import jazzchanges.degrees
import jazzchanges.distribution
import jazzchanges.key_center
import jazzchanges.quality
import jazzchanges.settings
import jazzchanges.shaping
import jazzchanges.transition_tables


logger = logging.getLogger(__name__)

RECENT_DEGREE_WINDOW = 8
TONIC_AFTER_MODULATION_PROBABILITY = 0.6

KeyLike = typing.Union[jazzchanges.key_center.Key, str, typing.Tuple[str, str]]


@dataclasses.dataclass(frozen=True)
class Bar:

	"""
	One generated bar: its number, one or two chords, the key at emission
	time, and whether the key changed while generating it.
	"""

	number: int
	chords: typing.Tuple[jazzchanges.chords.Chord, ...]
	key: jazzchanges.key_center.Key
	key_changed: bool


@dataclasses.dataclass(frozen=True)
class EngineState:

	"""Read-only snapshot for display."""

	key: jazzchanges.key_center.Key
	current_degree: jazzchanges.degrees.Degree
	bar_count: int


class MarkovJazzEngine:

	"""Generates jazz chord progressions one bar at a time."""

	def __init__ (
		self,
		settings: typing.Optional[typing.Union[jazzchanges.settings.Settings, typing.Mapping[str, float]]] = None,
		starting_key: typing.Optional[KeyLike] = None,
		rng: typing.Optional[random.Random] = None,
		seed: typing.Optional[int] = None
	) -> None:

		"""
		Initialize the engine and reset it to a starting key.

		Parameters:
			settings: A ``Settings`` instance or a mapping of setting names to
				values. Missing fields keep their defaults.
			starting_key: Key to begin in (``Key``, ``"Eb"``, ``"C minor"``,
				``("A", "minor")``). A common jazz key is picked when omitted.
			rng: Random source for every draw the engine makes.
			seed: Shortcut for ``rng=random.Random(seed)``; ignored when ``rng``
				is given.
		"""

		if settings is None:
			self.settings = jazzchanges.settings.Settings()

		elif isinstance(settings, jazzchanges.settings.Settings):
			# Copy so the caller's instance is never mutated by configure().
			self.settings = dataclasses.replace(settings)

		else:
			self.settings = jazzchanges.settings.Settings().merged(settings)

		self.rng = rng or random.Random(seed)

		self.key: jazzchanges.key_center.Key
		self.current_degree: jazzchanges.degrees.Degree
		self.previous_degree: typing.Optional[jazzchanges.degrees.Degree]
		self.approach_queue: typing.Deque[jazzchanges.degrees.Degree]
		self.recent_degrees: typing.Deque[jazzchanges.degrees.Degree]
		self.history: typing.List[Bar]
		self.bar_count: int

		self.reset(starting_key)


	# ------------------------------------------------------------------
	# Session control
	# ------------------------------------------------------------------

	def reset (self, starting_key: typing.Optional[KeyLike] = None) -> None:

		"""
		Return to the initial state: tonic degree, empty history and queue,
		bar counter at zero, in ``starting_key`` or a random common key.

		Raises:
			ValueError: If ``starting_key`` names an unknown root or mode.
		"""

		if starting_key is None:
			self.key = jazzchanges.key_center.random_key(self.rng)

		else:
			self.key = jazzchanges.key_center.Key.parse(starting_key)

		self.current_degree = jazzchanges.degrees.TONIC
		self.previous_degree = None
		self.approach_queue = collections.deque()
		self.recent_degrees = collections.deque(maxlen=RECENT_DEGREE_WINDOW)
		self.history = []
		self.bar_count = 0

		logger.info(f"Engine reset in {self.key}")


	def configure (self, changes: typing.Optional[typing.Mapping[str, float]] = None, **kwargs: float) -> jazzchanges.settings.Settings:

		"""
		Merge a partial settings update; unspecified fields keep their values.

		The merged settings are validated as a whole before anything changes,
		so a rejected update leaves the live settings untouched.

		Example:
			```python
			engine.configure(complexity=0.9)
			engine.configure({"key_stability": 0.5, "adventurousness": 0.6})
			```

		Raises:
			ValueError: For unknown names or values outside 0..1.
			TypeError: For non-numeric values.
		"""

		update: typing.Dict[str, float] = dict(changes or {})
		update.update(kwargs)

		self.settings = self.settings.merged(update)

		return self.settings


	def get_state (self) -> EngineState:

		"""Return the current key, degree and bar count."""

		return EngineState(key=self.key, current_degree=self.current_degree, bar_count=self.bar_count)


	# ------------------------------------------------------------------
	# Bar generation
	# ------------------------------------------------------------------

	def generate_bar (self) -> Bar:

		"""Advance by exactly one bar and return it."""

		self.bar_count += 1

		previous_key = self.key
		count = 2 if self.rng.random() < self.settings.two_chord_probability else 1

		# Draw every degree first so each chord can see what follows it.
		degrees: typing.List[jazzchanges.degrees.Degree] = []

		for _ in range(count):

			self.maybe_modulate()

			next_degree = self.get_next_degree()
			self.previous_degree = self.current_degree
			self.current_degree = next_degree
			self.recent_degrees.append(next_degree)

			degrees.append(next_degree)

		chords: typing.List[jazzchanges.chords.Chord] = []

		for index, degree in enumerate(degrees):

			if index < len(degrees) - 1:
				hint: typing.Optional[jazzchanges.degrees.Degree] = degrees[index + 1]
			else:
				hint = self.peek_likely_next_degree()

			chords.append(self.realize_chord(degree, hint))

		bar = Bar(
			number=self.bar_count,
			chords=tuple(chords),
			key=self.key,
			key_changed=self.key != previous_key
		)

		self.history.append(bar)

		return bar


	def generate_bars (self, count: int) -> typing.List[Bar]:

		"""Generate ``count`` consecutive bars."""

		if count < 0:
			raise ValueError("Bar count cannot be negative")

		return [self.generate_bar() for _ in range(count)]


	# ------------------------------------------------------------------
	# Key modulation
	# ------------------------------------------------------------------

	def modulation_chance (self) -> float:

		"""Return the chance of modulating before the next chord."""

		chance = 1.0 - self.settings.key_stability

		# Cadences invite key changes.
		if self.current_degree is jazzchanges.degrees.TONIC:
			chance *= 2

		return chance


	def maybe_modulate (self) -> bool:

		"""Modulate with the current modulation chance; return True if it fired."""

		if self.rng.random() < self.modulation_chance():
			self.modulate()
			return True

		return False


	def modulate (self, modulation: typing.Optional[jazzchanges.key_center.Modulation] = None) -> jazzchanges.key_center.Key:

		"""
		Move to a new key and return it.

		Parameters:
			modulation: Force a particular modulation type; drawn from the
				weighted table when omitted.
		"""

		if modulation is None:
			modulation = jazzchanges.distribution.choose_weighted(jazzchanges.key_center.KEY_MODULATIONS, self.rng)

		old_key = self.key
		self.key = jazzchanges.key_center.modulate_key(old_key, modulation)

		# Decision path: usually restart from the new tonic, otherwise keep the
		# degree token, which now names a different absolute root.
		if self.rng.random() < TONIC_AFTER_MODULATION_PROBABILITY:
			self.current_degree = jazzchanges.degrees.TONIC

		logger.debug(f"Modulation ({modulation.value}): {old_key} → {self.key}")

		return self.key


	# ------------------------------------------------------------------
	# Degree transitions
	# ------------------------------------------------------------------

	def raw_transitions (self) -> "jazzchanges.distribution.Distribution[jazzchanges.degrees.Degree]":

		"""Return the unshaped next-degree distribution for the current position."""

		return jazzchanges.transition_tables.lookup_transitions(self.previous_degree, self.current_degree, self.key.mode)


	def shaped_transitions (self) -> "jazzchanges.distribution.Distribution[jazzchanges.degrees.Degree]":

		"""Return the next-degree distribution after both shaping passes."""

		return jazzchanges.shaping.shape(self.raw_transitions(), self.settings.adventurousness, self.recent_degrees)


	def get_next_degree (self) -> jazzchanges.degrees.Degree:

		"""
		Choose the next degree without committing it.

		A queued approach run takes precedence; otherwise an approach may start,
		and failing that the shaped transition row is sampled.
		"""

		if self.approach_queue:
			return self.approach_queue.popleft()

		if self.rng.random() < jazzchanges.transition_tables.APPROACH_PROBABILITY:
			if self.try_start_approach():
				return self.approach_queue.popleft()

		return jazzchanges.distribution.choose_weighted(self.shaped_transitions(), self.rng)


	def try_start_approach (self) -> bool:

		"""
		Queue an approach run toward a target other than the current degree.

		Returns True if a run was queued.
		"""

		candidates = jazzchanges.transition_tables.approach_candidates(self.current_degree)

		if not candidates:
			return False

		sequence = jazzchanges.distribution.choose_weighted(candidates, self.rng)
		self.approach_queue = collections.deque(sequence.degrees)

		logger.debug(f"Approach toward {sequence.target}: {' '.join(str(d) for d in sequence.degrees)}")

		return True


	def peek_likely_next_degree (self) -> jazzchanges.degrees.Degree:

		"""
		Return the single most likely next degree from the unshaped row.

		Read-only: used as the lookahead hint for the last chord of a bar.
		"""

		likely = jazzchanges.distribution.most_probable(self.raw_transitions())

		if likely is None:
			return jazzchanges.degrees.TONIC

		return likely


	# ------------------------------------------------------------------
	# Chord realization
	# ------------------------------------------------------------------

	def realize_chord (
		self,
		degree: jazzchanges.degrees.Degree,
		next_degree_hint: typing.Optional[jazzchanges.degrees.Degree] = None
	) -> jazzchanges.chords.Chord:

		"""Realize ``degree`` in the current key."""

		return jazzchanges.quality.realize_chord(
			degree,
			self.key,
			self.settings.complexity,
			self.rng,
			next_degree_hint=next_degree_hint
		)
