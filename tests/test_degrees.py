import pytest

import jazzchanges.degrees


@pytest.mark.parametrize("degree, interval", [
	("I", 0),
	("ii", 2),
	("iii", 4),
	("IV", 5),
	("iv", 5),
	("V", 7),
	("v", 7),
	("vi", 9),
	("vii", 11),
	("bII", 1),
	("bIII", 3),
	("bVI", 8),
	("bVII", 10),
	("II", 2),
	("III", 4),
	("VI", 9),
	("#IV", 6),
])
def test_degree_interval (degree: str, interval: int) -> None:

	"""Every token should resolve through the major-scale interval table."""

	assert jazzchanges.degrees.degree_interval(degree) == interval


def test_degree_interval_accepts_enum_members () -> None:

	"""Enum members and raw tokens should resolve identically."""

	for degree in jazzchanges.degrees.Degree:
		assert jazzchanges.degrees.degree_interval(degree) == jazzchanges.degrees.degree_interval(degree.value)


def test_unknown_degree_interval_is_tonic () -> None:

	"""Unrecognised tokens should fall back to the tonic interval."""

	assert jazzchanges.degrees.degree_interval("xyz") == 0
	assert jazzchanges.degrees.degree_interval("") == 0


def test_degree_parse () -> None:

	"""Known tokens parse to members; unknown ones to None."""

	assert jazzchanges.degrees.Degree.parse("bVII") is jazzchanges.degrees.Degree.FLAT_VII
	assert jazzchanges.degrees.Degree.parse("vi") is jazzchanges.degrees.Degree.vi
	assert jazzchanges.degrees.Degree.parse("VII") is None


def test_degree_compares_equal_to_token () -> None:

	"""Degrees are str enums so they match plain tokens."""

	assert jazzchanges.degrees.Degree.SHARP_IV == "#IV"
	assert str(jazzchanges.degrees.Degree.ii) == "ii"


def test_mode_parse_and_flip () -> None:

	"""Modes parse case-insensitively and flip to each other."""

	assert jazzchanges.degrees.Mode.parse("Minor") is jazzchanges.degrees.Mode.MINOR
	assert jazzchanges.degrees.Mode.parse("dorian") is None
	assert jazzchanges.degrees.Mode.MAJOR.flipped() is jazzchanges.degrees.Mode.MINOR
	assert jazzchanges.degrees.Mode.MINOR.flipped() is jazzchanges.degrees.Mode.MAJOR
