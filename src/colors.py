"""Lineage colors: palette assignment and parent color blending."""

from matplotlib.colors import hsv_to_rgb, rgb_to_hsv, to_hex, to_rgb
import numpy as np

from models import Person

COLORS = [
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#96CEB4",
    "#FFEAA7",
    "#DDA0DD",
    "#98D8C8",
    "#F7DC6F",
    "#BB8FCE",
    "#85C1E9",
]


def is_light_color(color: str) -> bool:
    """Whether a color is light enough to carry black text (luminance > 0.5)."""
    r, g, b = to_rgb(color)
    return 0.299 * r + 0.587 * g + 0.114 * b > 0.5


def hex_to_hsv(color: str) -> tuple[float, float, float]:
    h, s, v = rgb_to_hsv(to_rgb(color))
    return float(h), float(s), float(v)


def rgb_to_hex(rgb) -> str:
    """Hex string of an RGB triple in [0, 1], channels rounded half up."""
    channels = np.floor(np.asarray(rgb, dtype=float) * 255 + 0.5)
    return to_hex(channels / 255)


def hsv_to_hex(hsv: tuple[float, float, float]) -> str:
    return rgb_to_hex(hsv_to_rgb(hsv))


def blend_hues(hues: list[float]) -> float:
    """
    Average hues on the [0, 1) color wheel.

    Two hues half a turn or more apart are averaged the short way round.
    Three or more hues use the plain arithmetic mean.
    """
    if len(hues) == 2:
        a, b = hues
        if abs(a - b) >= 0.5:
            return ((a + b + 1) / 2) % 1.0
        return (a + b) / 2
    return sum(hues) / len(hues)


def blend_colors(colors: list[str]) -> str:
    """Blend hex colors in HSV space, identical colors counting once."""
    if len(colors) == 1:
        return colors[0]

    hsv_colors = list(dict.fromkeys(hex_to_hsv(color) for color in colors))

    h = blend_hues([hsv[0] for hsv in hsv_colors])
    s = sum(hsv[1] for hsv in hsv_colors) / len(hsv_colors)
    v = sum(hsv[2] for hsv in hsv_colors) / len(hsv_colors)
    return hsv_to_hex((h, s, v))


def add_colors(
    generations: list[list[Person]], colors: list[str] = COLORS
) -> list[list[Person]]:
    """
    Color every person of the laid out generations.

    People without parents (first generation and orphans) start a lineage
    and take the next palette color, cycling through the palette in
    generation order. Everyone else gets the blend of their parents' colors.

    The palette counter starts at the size of the first generation, so with
    three people in it the first root gets colors[3].
    """
    color_index = len(generations[0]) if generations else 0
    for generation in generations:
        for person in generation:
            if not person.parents:
                person.color = colors[color_index % len(colors)]
                color_index += 1
                continue

            parent_colors = [p.color for p in person.parents if p.color is not None]
            person.color = blend_colors(parent_colors) if parent_colors else None

    return generations
