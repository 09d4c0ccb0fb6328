import pytest

from glasslink.options import is_valid_bool, parse_bool

TRUE_WORDS = ["1", "true", "yes", "on", "enable", "TRUE", "Yes", "ON", "Enable"]
FALSE_WORDS = ["0", "false", "no", "off", "disable", "FALSE", "No", "Off", "DISABLE"]


@pytest.mark.parametrize("value", TRUE_WORDS + FALSE_WORDS)
def test_valid_words(value):
    assert is_valid_bool(value) is True


@pytest.mark.parametrize("value", ["", "maybe", "2", "y", "enabled", " true", None])
def test_invalid_words(value):
    assert is_valid_bool(value) is False


@pytest.mark.parametrize("value", TRUE_WORDS)
def test_true_words(value):
    assert parse_bool(value) is True


@pytest.mark.parametrize("value", FALSE_WORDS + ["maybe", ""])
def test_other_words_are_false(value):
    assert parse_bool(value) is False