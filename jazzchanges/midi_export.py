"""Standard MIDI file export for generated progressions.

Writes a type-1 file with three tracks: tempo, chord voicings and a bass line
that plays each chord root in the jazz bass register (octave 2, MIDI 36-47).
Bars are split evenly between their chords.
"""

import logging
import typing

import mido

import jazzchanges.engine


logger = logging.getLogger(__name__)

TICKS_PER_BEAT = 480
BASS_OCTAVE = 2
CHORD_CHANNEL = 0
BASS_CHANNEL = 1
CHORD_VELOCITY = 70
BASS_VELOCITY = 90


def bass_note (root_pc: int, octave: int = BASS_OCTAVE) -> int:

	"""Return the MIDI note for a pitch class in ``octave`` (C2 = 36)."""

	return 12 * (octave + 1) + root_pc % 12


def _append_notes (track: mido.MidiTrack, channel: int, notes: typing.Sequence[int], velocity: int, duration: int) -> None:

	"""Append simultaneous notes lasting ``duration`` ticks to ``track``."""

	for note in notes:
		track.append(mido.Message("note_on", channel=channel, note=note, velocity=velocity, time=0))

	for index, note in enumerate(notes):
		track.append(mido.Message("note_off", channel=channel, note=note, velocity=0, time=duration if index == 0 else 0))


def progression_to_midi (
	bars: typing.Sequence[jazzchanges.engine.Bar],
	bpm: float = 120,
	root_midi: int = 60,
	beats_per_bar: int = 4
) -> mido.MidiFile:

	"""Build a MIDI file from generated bars.

	Parameters:
		bars: Bars in playing order.
		bpm: Tempo written to the tempo track.
		root_midi: Reference note each chord voicing is centred around.
		beats_per_bar: Length of one bar in quarter notes.

	Returns:
		A ``mido.MidiFile`` ready to save or inspect.
	"""

	if bpm <= 0:
		raise ValueError("BPM must be positive")

	if beats_per_bar < 1:
		raise ValueError("Beats per bar must be at least 1")

	mid = mido.MidiFile(type=1, ticks_per_beat=TICKS_PER_BEAT)

	tempo_track = mido.MidiTrack()
	tempo_track.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(bpm), time=0))
	tempo_track.append(mido.MetaMessage("time_signature", numerator=beats_per_bar, denominator=4, time=0))
	mid.tracks.append(tempo_track)

	chord_track = mido.MidiTrack()
	chord_track.append(mido.MetaMessage("track_name", name="Chords", time=0))
	mid.tracks.append(chord_track)

	bass_track = mido.MidiTrack()
	bass_track.append(mido.MetaMessage("track_name", name="Bass", time=0))
	mid.tracks.append(bass_track)

	bar_ticks = beats_per_bar * TICKS_PER_BEAT

	for bar in bars:

		duration = bar_ticks // len(bar.chords)

		if bar.key_changed:
			chord_track.append(mido.MetaMessage("marker", text=f"Key: {bar.key}", time=0))

		for chord in bar.chords:
			_append_notes(chord_track, CHORD_CHANNEL, chord.tones(root_midi), CHORD_VELOCITY, duration)
			_append_notes(bass_track, BASS_CHANNEL, [bass_note(chord.root_pc)], BASS_VELOCITY, duration)

	return mid


def save_progression (
	bars: typing.Sequence[jazzchanges.engine.Bar],
	filename: str,
	bpm: float = 120,
	root_midi: int = 60,
	beats_per_bar: int = 4
) -> None:

	"""Write generated bars to a MIDI file."""

	mid = progression_to_midi(bars, bpm=bpm, root_midi=root_midi, beats_per_bar=beats_per_bar)

	logger.info(f"Saving {len(bars)} bars to {filename}...")

	mid.save(filename)

	logger.info(f"Saved {filename}")
