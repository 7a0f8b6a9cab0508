import pytest

from localtalk.models import SpeakOptions, Token


def test_token_blank_detection():
    assert Token(" \t\n", False).is_blank
    assert not Token(" a ", False).is_blank


def test_options_defaults():
    options = SpeakOptions()
    assert options.voice is None
    assert options.rate is None
    assert options.tokenize is False


@pytest.mark.parametrize("rate", [0, -5, 1.5, "200", True])
def test_options_reject_invalid_rate(rate):
    with pytest.raises(ValueError):
        SpeakOptions(rate=rate)


def test_options_accept_positive_rate():
    assert SpeakOptions(rate=180).rate == 180
