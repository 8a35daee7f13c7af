import collections
import itertools
import random

import pytest

import jazzchanges.degrees
import jazzchanges.engine
import jazzchanges.key_center
import jazzchanges.quality
import jazzchanges.settings
import jazzchanges.transition_tables


D = jazzchanges.degrees.Degree
Key = jazzchanges.key_center.Key
MAJOR = jazzchanges.degrees.Mode.MAJOR
MINOR = jazzchanges.degrees.Mode.MINOR


# ---------------------------------------------------------------------------
# Bars
# ---------------------------------------------------------------------------

def test_generate_bar_never_fails_across_settings () -> None:

	"""Every in-range combination of settings yields bars of one or two chords."""

	levels = (0.0, 0.5, 1.0)

	for stability, adventure, complexity, two_chord in itertools.product(levels, repeat=4):

		engine = jazzchanges.engine.MarkovJazzEngine(
			settings={
				"key_stability": stability,
				"adventurousness": adventure,
				"complexity": complexity,
				"two_chord_probability": two_chord,
			},
			seed=17
		)

		for bar in engine.generate_bars(20):
			assert 1 <= len(bar.chords) <= 2


def test_bar_numbers_start_at_one_and_increase (engine: jazzchanges.engine.MarkovJazzEngine) -> None:

	"""Bar numbers count up by one, restarting after reset."""

	numbers = [bar.number for bar in engine.generate_bars(10)]

	assert numbers == list(range(1, 11))

	engine.reset("F")

	assert engine.generate_bar().number == 1


def test_history_is_retained_and_cleared (engine: jazzchanges.engine.MarkovJazzEngine) -> None:

	"""Generated bars are kept until reset."""

	bars = engine.generate_bars(5)

	assert engine.history == bars

	engine.reset("C")

	assert engine.history == []
	assert engine.get_state().bar_count == 0


def test_two_chord_probability_extremes () -> None:

	"""0 gives single-chord bars; 1 gives two-chord bars."""

	engine = jazzchanges.engine.MarkovJazzEngine(settings={"two_chord_probability": 0.0}, seed=4)

	assert all(len(bar.chords) == 1 for bar in engine.generate_bars(50))

	engine.configure(two_chord_probability=1.0)

	assert all(len(bar.chords) == 2 for bar in engine.generate_bars(50))


def test_bars_are_immutable (engine: jazzchanges.engine.MarkovJazzEngine) -> None:

	"""Bars and chords are frozen."""

	bar = engine.generate_bar()

	with pytest.raises(AttributeError):
		bar.number = 99

	with pytest.raises(AttributeError):
		bar.chords[0].root = "C"


def test_key_changed_flag () -> None:

	"""Bars report a key change only when one happened."""

	stable = jazzchanges.engine.MarkovJazzEngine(settings={"key_stability": 1.0}, starting_key="C", seed=2)

	assert not any(bar.key_changed for bar in stable.generate_bars(40))
	assert all(bar.key == Key("C") for bar in stable.history)

	restless = jazzchanges.engine.MarkovJazzEngine(settings={"key_stability": 0.0, "two_chord_probability": 0.0}, starting_key="C", seed=2)

	assert all(bar.key_changed for bar in restless.generate_bars(40))


# ---------------------------------------------------------------------------
# Reset, configure and state
# ---------------------------------------------------------------------------

def test_reset_with_explicit_key () -> None:

	"""An explicit key is used exactly, starting from the tonic."""

	engine = jazzchanges.engine.MarkovJazzEngine(settings={"key_stability": 1.0}, seed=9)
	engine.generate_bars(6)

	engine.reset("F# minor")
	state = engine.get_state()

	assert state.key == Key("Gb", MINOR)
	assert state.current_degree is D.I
	assert state.bar_count == 0
	assert engine.previous_degree is None
	assert not engine.approach_queue
	assert not engine.recent_degrees

	assert engine.generate_bar().key == Key("Gb", MINOR)


def test_reset_rejects_unknown_key () -> None:

	"""Unknown starting keys raise ValueError."""

	engine = jazzchanges.engine.MarkovJazzEngine(seed=9)

	with pytest.raises(ValueError):
		engine.reset("H major")


def test_random_starting_key_is_common () -> None:

	"""Without a starting key the engine picks a common jazz key."""

	engine = jazzchanges.engine.MarkovJazzEngine(seed=21)

	for _ in range(50):
		engine.reset()
		assert engine.key.root in jazzchanges.key_center.COMMON_ROOTS


def test_configure_is_partial (engine: jazzchanges.engine.MarkovJazzEngine) -> None:

	"""Unspecified fields keep their values."""

	engine.configure(complexity=0.9)
	engine.configure({"adventurousness": 0.6})

	assert engine.settings.complexity == 0.9
	assert engine.settings.adventurousness == 0.6
	assert engine.settings.key_stability == 1.0
	assert engine.settings.two_chord_probability == 0.15


@pytest.mark.parametrize("changes, error", [
	({"complexity": 1.5}, ValueError),
	({"key_stability": -0.1}, ValueError),
	({"tempo": 0.5}, ValueError),
	({"adventurousness": "high"}, TypeError),
	({"complexity": float("nan")}, ValueError),
	({"key_stability": float("inf")}, ValueError),
])
def test_configure_rejects_bad_values (engine: jazzchanges.engine.MarkovJazzEngine, changes: dict, error: type) -> None:

	"""Bad updates raise and leave the live settings untouched."""

	before = engine.settings

	with pytest.raises(error):
		engine.configure(changes)

	assert engine.settings == before


def test_constructor_copies_settings_instance () -> None:

	"""A caller's Settings object is not modified by configure()."""

	settings = jazzchanges.settings.Settings(complexity=0.2)
	engine = jazzchanges.engine.MarkovJazzEngine(settings=settings, seed=1)

	engine.configure(complexity=0.8)

	assert settings.complexity == 0.2


def test_get_state_tracks_current_degree (engine: jazzchanges.engine.MarkovJazzEngine) -> None:

	"""The snapshot reflects the last emitted degree."""

	bar = engine.generate_bar()
	state = engine.get_state()

	assert state.bar_count == 1
	assert state.key == bar.key
	assert state.current_degree == engine.recent_degrees[-1]


# ---------------------------------------------------------------------------
# Degree transitions
# ---------------------------------------------------------------------------

def test_queued_approach_preempts_everything (engine: jazzchanges.engine.MarkovJazzEngine) -> None:

	"""A queued run is returned head first without consulting the tables."""

	engine.approach_queue = collections.deque([D.vi, D.II, D.V])

	assert [engine.get_next_degree() for _ in range(3)] == [D.vi, D.II, D.V]
	assert not engine.approach_queue


def test_triggered_approach_completes_over_consecutive_bars (engine: jazzchanges.engine.MarkovJazzEngine) -> None:

	"""Once started, an approach run plays out in full."""

	engine.configure(two_chord_probability=0.0)

	assert engine.try_start_approach()
	expected = list(engine.approach_queue)

	played = []

	for _ in range(len(expected)):
		engine.generate_bar()
		played.append(engine.get_state().current_degree)

	assert played == expected


def test_approach_never_targets_current_degree () -> None:

	"""An approach toward the degree already sounding is never chosen."""

	engine = jazzchanges.engine.MarkovJazzEngine(starting_key="C", seed=5)

	for _ in range(200):
		engine.approach_queue.clear()
		engine.current_degree = D.I
		assert engine.try_start_approach()
		assert engine.approach_queue[-1] is not D.I


def test_approach_start_from_transition_draw (scripted_rng) -> None:

	"""A low approach roll starts a run and returns its first degree."""

	# 0.0 < 0.12 starts an approach; 0.0 picks the first candidate (ii-V-I).
	rng = scripted_rng([0.0, 0.0])
	engine = jazzchanges.engine.MarkovJazzEngine(starting_key="C", rng=rng)
	engine.current_degree = D.vi

	assert engine.get_next_degree() is D.ii
	assert list(engine.approach_queue) == [D.V, D.I]


def test_second_order_override_drives_the_draw (scripted_rng) -> None:

	"""After ii → V the override row is sampled."""

	# 0.5 skips the approach; 0.0 picks the first override entry (I).
	rng = scripted_rng([0.5, 0.0])
	engine = jazzchanges.engine.MarkovJazzEngine(settings={"adventurousness": 0.0}, starting_key="C", rng=rng)
	engine.previous_degree = D.ii
	engine.current_degree = D.V

	assert engine.raw_transitions() is jazzchanges.transition_tables.SECOND_ORDER_OVERRIDES[(D.ii, D.V)]
	assert engine.get_next_degree() is D.I


def test_minor_key_reads_minor_table (engine: jazzchanges.engine.MarkovJazzEngine) -> None:

	"""The mode of the live key picks the table."""

	engine.reset("A minor")

	assert engine.raw_transitions() is jazzchanges.transition_tables.minor.TRANSITIONS[D.I]


def test_shaped_transitions_apply_anti_repetition (engine: jazzchanges.engine.MarkovJazzEngine) -> None:

	"""A degree heard three times in the window is weighted at most 0.3x."""

	engine.configure(adventurousness=0.0)
	engine.current_degree = D.I
	engine.recent_degrees.extend([D.ii, D.ii, D.ii, D.V, D.I])

	raw = dict(engine.raw_transitions())
	shaped = dict(engine.shaped_transitions())

	assert shaped[D.ii] <= raw[D.ii] * 0.3 + 1e-12
	assert shaped[D.I] == pytest.approx(raw[D.I])


def test_recent_degree_window_is_bounded (engine: jazzchanges.engine.MarkovJazzEngine) -> None:

	"""Only the last eight degrees are remembered."""

	engine.generate_bars(30)

	assert len(engine.recent_degrees) == jazzchanges.engine.RECENT_DEGREE_WINDOW


def test_peek_returns_most_likely_without_mutating (engine: jazzchanges.engine.MarkovJazzEngine) -> None:

	"""Peeking reads the unshaped row and changes nothing."""

	engine.previous_degree = D.ii
	engine.current_degree = D.V
	engine.recent_degrees.extend([D.I, D.I, D.I])
	rng_state = engine.rng.getstate()

	assert engine.peek_likely_next_degree() is D.I
	assert engine.current_degree is D.V
	assert engine.previous_degree is D.ii
	assert engine.rng.getstate() == rng_state


def test_peek_first_order () -> None:

	"""Without an override the first-order favourite is returned."""

	major = jazzchanges.engine.MarkovJazzEngine(starting_key="C", seed=1)
	minor = jazzchanges.engine.MarkovJazzEngine(starting_key="C minor", seed=1)

	assert major.peek_likely_next_degree() is D.ii
	assert minor.peek_likely_next_degree() is D.iv


# ---------------------------------------------------------------------------
# Modulation
# ---------------------------------------------------------------------------

def test_modulation_chance_doubles_on_tonic (engine: jazzchanges.engine.MarkovJazzEngine) -> None:

	"""Landing on the tonic doubles the chance of a key change."""

	engine.configure(key_stability=0.85)

	engine.current_degree = D.V
	assert engine.modulation_chance() == pytest.approx(0.15)

	engine.current_degree = D.I
	assert engine.modulation_chance() == pytest.approx(0.30)


def test_forced_modulation_root_arithmetic (engine: jazzchanges.engine.MarkovJazzEngine) -> None:

	"""Explicit modulation types move the key exactly."""

	engine.modulate(jazzchanges.key_center.Modulation.TRITONE)
	assert engine.key == Key("Gb")

	engine.reset("C")
	engine.modulate(jazzchanges.key_center.Modulation.RELATIVE)
	assert engine.key == Key("A", MINOR)


def test_modulation_can_restart_on_tonic (scripted_rng) -> None:

	"""A low follow-up roll resets the degree to the new tonic."""

	# 0.0 picks fifth_up; 0.5 < 0.6 forces the tonic.
	engine = jazzchanges.engine.MarkovJazzEngine(starting_key="C", rng=scripted_rng([0.0, 0.5]))
	engine.current_degree = D.V

	engine.modulate()

	assert engine.key == Key("G")
	assert engine.current_degree is D.I


def test_modulation_can_keep_degree (scripted_rng) -> None:

	"""A high follow-up roll keeps the degree token."""

	# 0.99 picks step_down (the last entry); 0.9 keeps the degree.
	engine = jazzchanges.engine.MarkovJazzEngine(starting_key="C", rng=scripted_rng([0.99, 0.9]))
	engine.current_degree = D.V

	engine.modulate()

	assert engine.key == Key("Bb")
	assert engine.current_degree is D.V


def test_maybe_modulate_respects_stability (engine: jazzchanges.engine.MarkovJazzEngine) -> None:

	"""Full stability never modulates; zero stability always does."""

	assert not any(engine.maybe_modulate() for _ in range(100))
	assert engine.key == Key("C")

	engine.configure(key_stability=0.0)

	assert all(engine.maybe_modulate() for _ in range(100))


# ---------------------------------------------------------------------------
# Chord realization in context
# ---------------------------------------------------------------------------

def test_two_chord_bar_uses_following_degree_as_hint () -> None:

	"""A dominant followed by a minor chord in the same bar takes dark colours."""

	engine = jazzchanges.engine.MarkovJazzEngine(
		settings={"key_stability": 1.0, "two_chord_probability": 1.0, "complexity": 1.0},
		starting_key="C",
		seed=3
	)

	dark = set(jazzchanges.quality.QUALITY_OPTIONS["dominant_to_minor"])
	bright = set(jazzchanges.quality.QUALITY_OPTIONS["dominant_to_major"])
	checked = 0

	for bar in engine.generate_bars(300):

		first, second = bar.chords

		if first.degree != "V":
			continue

		checked += 1

		if second.degree in ("ii", "iii", "vi", "iv", "v"):
			assert first.quality in dark
		elif second.degree in ("I", "IV", "♭VI", "♭VII"):
			assert first.quality in bright

	assert checked > 0


def test_seeded_engines_are_repeatable () -> None:

	"""Two engines with the same seed produce the same progression."""

	first = jazzchanges.engine.MarkovJazzEngine(starting_key="Bb", seed=99)
	second = jazzchanges.engine.MarkovJazzEngine(starting_key="Bb", seed=99)

	assert first.generate_bars(32) == second.generate_bars(32)


def test_injected_rng_is_used () -> None:

	"""An injected random source drives every draw."""

	rng = random.Random(0)
	engine = jazzchanges.engine.MarkovJazzEngine(starting_key="C", rng=rng)

	assert engine.rng is rng


def test_nan_setting_rejected_at_construction () -> None:

	"""NaN never reaches the engine, so bar generation cannot trip over it."""

	with pytest.raises(ValueError):
		jazzchanges.settings.Settings(adventurousness=float("nan"))

	with pytest.raises(ValueError):
		jazzchanges.engine.MarkovJazzEngine(settings={"complexity": float("nan")}, seed=1)
