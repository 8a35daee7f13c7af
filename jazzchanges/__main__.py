import argparse
import logging
import os
import sys
import typing

import yaml

import jazzchanges.engine
import jazzchanges.lead_sheet
import jazzchanges.midi_export


logger = logging.getLogger(__name__)

DEFAULT_BARS = 16


def load_config (config_path: str = 'config.yaml') -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def build_parser () -> argparse.ArgumentParser:

	"""Return the command-line parser."""

	parser = argparse.ArgumentParser(prog="jazzchanges", description="Generate jazz chord changes bar by bar")
	parser.add_argument("--config", default="config.yaml", help="YAML config file (default: config.yaml)")
	parser.add_argument("--bars", type=int, default=None, help=f"Number of bars to generate (default: {DEFAULT_BARS})")
	parser.add_argument("--key", default=None, help="Starting key, e.g. 'Eb', 'C minor', 'F#m' (default: random)")
	parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable output")
	parser.add_argument("--bars-per-row", type=int, default=None, help="Bars per lead-sheet row (default: 4)")
	parser.add_argument("--degrees", action="store_true", help="Show Roman numerals under each row")
	parser.add_argument("--midi", default=None, help="Also write the progression to this MIDI file")
	parser.add_argument("--bpm", type=float, default=None, help="Tempo for the MIDI file (default: 120)")
	parser.add_argument("--verbose", action="store_true", help="Log modulations and approach runs")

	return parser


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point: generate a progression and print it as a lead sheet.
	"""

	args = build_parser().parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

	config = load_config(args.config)

	midi_config = config.get('midi', {}) or {}
	bars = args.bars if args.bars is not None else config.get('bars', DEFAULT_BARS)
	bars_per_row = args.bars_per_row if args.bars_per_row is not None else config.get('bars_per_row', jazzchanges.lead_sheet.DEFAULT_BARS_PER_ROW)
	seed = args.seed if args.seed is not None else config.get('seed')
	starting_key = args.key if args.key is not None else config.get('key')
	midi_filename = args.midi if args.midi is not None else midi_config.get('filename')
	bpm = args.bpm if args.bpm is not None else midi_config.get('bpm', 120)

	try:
		engine = jazzchanges.engine.MarkovJazzEngine(
			settings=config.get('settings') or {},
			starting_key=starting_key,
			seed=seed
		)
		progression = engine.generate_bars(bars)
		lines = jazzchanges.lead_sheet.format_rows(progression, bars_per_row=bars_per_row, show_degrees=args.degrees)

	except (TypeError, ValueError) as e:
		logger.error(f"Invalid configuration: {e}")
		return 2

	print("\n".join(lines))

	if midi_filename:
		try:
			jazzchanges.midi_export.save_progression(
				progression,
				midi_filename,
				bpm=bpm,
				root_midi=midi_config.get('root_midi', 60)
			)
		except ValueError as e:
			logger.error(f"Invalid MIDI settings: {e}")
			return 2
		except OSError as e:
			logger.error(f"Failed to save MIDI file: {e}")
			return 1

	return 0


if __name__ == "__main__":
	sys.exit(main())
