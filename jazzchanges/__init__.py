"""
jazzchanges - procedural jazz chord changes, one bar at a time.

Rather than stringing random chords together, jazzchanges walks a layered
harmonic model:

- **Key centre.** A tonal centre that persists across bars and occasionally
  modulates (up or down a fifth, to the relative or parallel key, by tritone
  or by step), more readily right after a cadence.
- **Scale-degree transitions.** First-order tables per mode, second-order
  overrides that follow idiomatic chains (ii–V → I, vi–ii → V), and queued
  approach runs (ii–V–I, vi–II7–V, ...) that play out in full.
- **Probability shaping.** ``adventurousness`` flattens each transition row
  toward uniform; an anti-repetition penalty damps degrees heard often in
  the last eight chords.
- **Context-aware chord quality.** Each degree becomes a concrete chord whose
  colour depends on ``complexity`` and, for dominants, on whether the next
  chord is a major or minor resolution.

Output is a sequence of ``Bar`` objects. Timing, playback and display belong
to the caller; a plain-text lead sheet (``jazzchanges.lead_sheet``) and MIDI
file export (``jazzchanges.midi_export``) are included.

Minimal example:

    ```python
    import jazzchanges

    engine = jazzchanges.MarkovJazzEngine(starting_key="Bb", seed=3)

    for bar in engine.generate_bars(4):
        print(bar.number, bar.key, [chord.name() for chord in bar.chords])
    ```

Package-level exports: ``MarkovJazzEngine``, ``Bar``, ``Chord``, ``Key``,
``Mode``, ``Degree``, ``Settings``.
"""

import jazzchanges.chords
import jazzchanges.degrees
import jazzchanges.engine
import jazzchanges.key_center
import jazzchanges.settings


MarkovJazzEngine = jazzchanges.engine.MarkovJazzEngine
Bar = jazzchanges.engine.Bar
Chord = jazzchanges.chords.Chord
Key = jazzchanges.key_center.Key
Mode = jazzchanges.degrees.Mode
Degree = jazzchanges.degrees.Degree
Settings = jazzchanges.settings.Settings
