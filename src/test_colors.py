import math

import pytest

from colors import (
    COLORS,
    add_colors,
    blend_colors,
    blend_hues,
    hex_to_hsv,
    is_light_color,
    rgb_to_hex,
)
from graph import find_person
from layout import sort_data


def test_is_light_color():
    assert is_light_color("#FFFFFF")
    assert is_light_color("#FFEAA7")
    assert not is_light_color("#000000")
    assert not is_light_color("#000080")


def test_blend_two_hues_wraps_around():
    assert blend_hues([0.1, 0.95]) == pytest.approx(0.025)
    assert blend_hues([0.95, 0.1]) == pytest.approx(0.025)
    assert blend_hues([0.1, 0.3]) == pytest.approx(0.2)


def test_blend_three_hues_uses_plain_mean():
    # Unlike the two-hue case, no wrap-around correction here
    assert blend_hues([0.1, 0.95, 0.5]) == pytest.approx(1.55 / 3)


def test_blend_colors():
    assert blend_colors(["#ff0000", "#00ff00"]) == "#ffff00"

    # Red and magenta meet on the red side of the wheel, not around cyan
    h, s, v = hex_to_hsv(blend_colors(["#ff0000", "#ff00ff"]))
    assert h == pytest.approx(11 / 12, abs=0.01)
    assert s == pytest.approx(1.0)
    assert v == pytest.approx(1.0)


def test_blend_colors_single_and_duplicates():
    assert blend_colors(["#FF6B6B"]) == "#FF6B6B"
    assert blend_colors(["#4ECDC4", "#4ECDC4"]) == "#4ecdc4"


def test_add_colors_roots_and_descendants():
    tree = [
        {"A": {"children": ["X"]}},
        {"X": {"children": []}, "O": {"children": ["P", "Q"]}},
        {"P": {"children": []}, "Q": {"children": []}},
    ]
    generations = add_colors(sort_data(tree))

    # The palette counter starts after the first generation's size
    assert find_person(generations, "A", 0).color == COLORS[1]
    # Orphans take the next palette color
    assert find_person(generations, "O", 1).color == COLORS[2]
    assert find_person(generations, "X", 1).color == COLORS[1]
    assert find_person(generations, "P", 2).color == COLORS[2]
    assert all(p.color is not None for generation in generations for p in generation)


def test_add_colors_blends_parents():
    tree = [
        {"A": {"children": ["X"]}, "B": {"children": ["X"]}},
        {"X": {"children": []}},
    ]
    palette = ["#ff0000", "#00ff00"]
    generations = add_colors(sort_data(tree), palette)

    assert find_person(generations, "A", 0).color == "#ff0000"
    assert find_person(generations, "B", 0).color == "#00ff00"
    assert find_person(generations, "X", 1).color == "#ffff00"


def test_add_colors_cycles_palette():
    tree = [{"A": {"children": []}, "B": {"children": []}, "C": {"children": []}}]
    generations = add_colors(sort_data(tree), ["#111111", "#222222"])

    assert [p.color for p in generations[0]] == ["#222222", "#111111", "#222222"]


def test_rgb_to_hex_rounds_half_up():
    assert rgb_to_hex((0.5, 0.5, 0.5)) == "#808080"
    assert rgb_to_hex((1.0, 0.0, 0.0)) == "#ff0000"
    for channel in (2, 126, 226):
        value = (channel + 0.5) / 255
        expected = format(math.floor(value * 255 + 0.5), "02x")
        assert rgb_to_hex((value, 0.0, 0.0))[1:3] == expected
