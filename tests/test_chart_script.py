"""Check that the browser chart script uses the same layout constants as chart.py."""
import re

import pytest

from elektron import chart
from elektron.config import PACKAGE_DIR


@pytest.fixture(scope="module")
def script():
    return (PACKAGE_DIR / "static" / "chart.js").read_text(encoding="utf-8")


def js_constant(script, name):
    match = re.search(rf"const {name} = (.+?);", script)
    assert match, f"{name} not found in chart.js"
    return match.group(1)


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Y_AXIS_TICKS", chart.Y_AXIS_TICKS),
        ("PADDING_RATIO", chart.PADDING_RATIO),
        ("FLAT_DAY_PADDING", chart.FLAT_DAY_PADDING),
        ("LABEL_PADDING", chart.LABEL_PADDING),
    ],
)
def test_numeric_constants_match(script, name, expected):
    assert float(js_constant(script, name)) == expected


def test_no_data_message_matches(script):
    assert js_constant(script, "NO_DATA_MESSAGE") == f"'{chart.NO_DATA_MESSAGE}'"


def test_margin_matches(script):
    margin = dict(
        (key, float(value))
        for key, value in re.findall(r"(\w+): ([\d.]+)", js_constant(script, "MARGIN"))
    )
    expected = chart.Margin()

    assert margin == {
        "top": expected.top,
        "right": expected.right,
        "bottom": expected.bottom,
        "left": expected.left,
    }


def test_font_size_matches(script):
    assert js_constant(script, "FONT") == f"'{int(chart.FONT_SIZE)}px JetBrainsMono'"


def test_navigation_commits_state_before_fetching(script):
    navigate = re.search(r"const navigate = changes => \{(.*?)\n        \};", script, re.S).group(1)

    assert navigate.index("state = { ...state, ...changes };") < navigate.index("load(state)")
    assert "if (request !== latestRequest) return;" in navigate
    assert "shiftDate(state.date, -1)" in script
