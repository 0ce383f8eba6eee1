import pytest

from montyhall.simulation.strategies import STRATEGY_ORDER, Strategy


def test_strategy_values_and_order():
    assert [s.value for s in Strategy] == ["stay", "switch"]
    assert STRATEGY_ORDER == ("stay", "switch")
    assert str(Strategy.SWITCH) == "switch"


def test_stays_flag():
    assert Strategy.STAY.stays is True
    assert Strategy.SWITCH.stays is False


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("stay", Strategy.STAY),
        (" Switch ", Strategy.SWITCH),
        ("STAY", Strategy.STAY),
        (Strategy.SWITCH, Strategy.SWITCH),
    ],
)
def test_parse(raw, expected):
    assert Strategy.parse(raw) is expected


def test_parse_unknown():
    with pytest.raises(ValueError, match="Unknown strategy 'hold'"):
        Strategy.parse("hold")
