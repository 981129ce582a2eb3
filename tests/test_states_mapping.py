import pytest

from GameControl.common.states import to_view


@pytest.mark.parametrize(
    "state,expected",
    [
        ("SELECTING", "selection"),
        ("selecting", "selection"),
        ("RESULT", "result"),
    ],
)
def test_to_view_known_mappings(state, expected):
    assert to_view(state) == expected


def test_to_view_unknown_passthrough():
    assert to_view("UNKNOWN") == "unknown"
