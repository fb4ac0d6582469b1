"""DOT description of the laid out family tree, and Graphviz rendering."""

from html import escape
import math
from pathlib import Path

import pydot

from colors import COLORS, add_colors, is_light_color
from layout import sort_data, tree_sizes
from models import FamilyData, Person
from ordinals import french_ordinal

ANCHOR_NODE = "anchor_invisible"

# Attributes of the invisible layout helper nodes (anchor and spacers)
HELPER_ATTRS = {"height": "0", "width": "0", "style": "invis"}


def _person_label(person: Person, show_debug_infos: bool) -> str:
    name = escape(person.name, quote=False)
    if show_debug_infos:
        position = ", ".join(str(x) for x in person.position)
        return f'<{name}<FONT POINT-SIZE="8"><br/>[{position}]<br/>joins: {person.joins}</FONT>>'
    if person.title is not None:
        title = escape(person.title, quote=False)
        return f'<{name}<FONT POINT-SIZE="8"><br/>{title}</FONT>>'
    return f"<{name}>"


def _border_width(person: Person) -> str:
    if person.title == "Resp":
        return "4"
    if person.title is not None:
        return "2.5"
    return "1"


def _person_node(person: Person, show_debug_infos: bool) -> pydot.Node:
    if person.invisible:
        return pydot.Node(
            person.node_id, fixedsize="true", height="0", width="0", label="", style="invis"
        )

    return pydot.Node(
        person.node_id,
        label=_person_label(person, show_debug_infos),
        fillcolor=person.color,
        fontcolor="black" if is_light_color(person.color) else "white",
        penwidth=_border_width(person),
        shape="box",
        style="filled,rounded",
    )


def build_dot(
    generations: list[list[Person]],
    first_year: int,
    generation_count: int | None = None,
    show_debug_infos: bool = False,
) -> pydot.Dot:
    """
    Build the Graphviz description of positioned and colored generations.

    Creates a top-to-bottom chart where:
    - A column of generation labels sits on the left, chained from an
      invisible anchor through one invisible spacer per generation
    - Each person is a box filled with their lineage color
    - Invisible edges pin the left-to-right order of every generation, with
      a wider gap between two different trees
    - rank=same subgraphs keep each generation on one row

    Args:
        generations: Output of layout.sort_data, colored by colors.add_colors
        first_year: Year of the first generation, used in the labels
        generation_count: Number of labelled generations (defaults to all of
            them; a trailing generation of invisible spacers is not labelled)
        show_debug_infos: Show positions and joins instead of titles

    Returns:
        The pydot graph
    """
    if generation_count is None:
        generation_count = len(generations)

    P = pydot.Dot(graph_type="digraph")
    P.set("rankdir", "TB")  # Top-to-bottom (ancestors at top)
    P.set("splines", "spline")
    P.set("nodesep", "0.5")  # Horizontal spacing between nodes

    # ranks[i] holds the node ids of generation i, in insertion order
    ranks: list[dict[str, None]] = [{} for _ in generations]

    P.add_node(pydot.Node(ANCHOR_NODE, **HELPER_ATTRS))

    # Generation labels. Person ids end in "_<generation>", helper ids never do.
    previous = ANCHOR_NODE
    for index in range(generation_count):
        year = first_year + index
        label_node = f"gen label {index}"
        spacer_node = f"spacer {index}"
        P.add_node(
            pydot.Node(
                label_node,
                label=(
                    f"<<B>{french_ordinal(index + 1, True)} génération</B> "
                    f"({year}-{year + 5})>"
                ),
                fillcolor="lightgrey",
                fixedsize="true",
                fontweight="bold",
                penwidth="4",
                shape="box",
                style="filled,rounded",
                width="4",
            )
        )
        P.add_node(pydot.Node(spacer_node, label="", **HELPER_ATTRS))
        P.add_edge(pydot.Edge(previous, spacer_node, arrowhead="none", style="invis"))
        P.add_edge(pydot.Edge(spacer_node, label_node, arrowhead="none", style="invis"))
        previous = spacer_node

        ranks[index][label_node] = None
        ranks[index][spacer_node] = None

    # People
    for index, generation in enumerate(generations):
        for person in generation:
            P.add_node(_person_node(person, show_debug_infos))
            ranks[index][person.node_id] = None

    # Parent -> child edges
    seen: set[tuple[str, str]] = set()
    for generation in generations:
        for person in generation:
            for child in person.children:
                key = (person.node_id, child.node_id)
                if key in seen:
                    continue
                seen.add(key)
                if not person.invisible and not child.invisible:
                    P.add_edge(pydot.Edge(*key, weight="1000"))
                else:
                    P.add_edge(pydot.Edge(*key, arrowhead="none", style="invis", weight="500"))

    # Enforce horizontal ordering of each generation
    sizes = tree_sizes(generations)
    for generation in generations:
        for left, right in zip(generation, generation[1:]):
            minlen = "1"
            if left.position[0] != right.position[0]:
                gap = 2 + 0.4 * math.sqrt(sizes[left.position[0]] + sizes[right.position[0]])
                minlen = str(gap)
            P.add_edge(
                pydot.Edge(
                    left.node_id,
                    right.node_id,
                    arrowhead="none",
                    minlen=minlen,
                    style="invis",
                    weight="1",
                )
            )

    # Add rank=same subgraphs to put every generation on one row
    for index, node_ids in enumerate(ranks):
        if not node_ids:
            continue
        sg = pydot.Subgraph(f"rank_{index}", rank="same")
        for node_id in node_ids:
            sg.add_node(pydot.Node(node_id))
        P.add_subgraph(sg)

    return P


def generate_dot_data(
    data: FamilyData, show_debug_infos: bool = False, colors: list[str] = COLORS
) -> tuple[str, list[list[Person]]]:
    """Run the whole layout pipeline; return the DOT text and the Person graph."""
    children_tree = data.get("children_tree") or []
    generations = add_colors(sort_data(children_tree), colors)
    P = build_dot(generations, data["first_year"], len(children_tree), show_debug_infos)
    return P.to_string(), generations


def generate_dot(data: FamilyData, show_debug_infos: bool = False) -> str:
    dot, _ = generate_dot_data(data, show_debug_infos)
    return dot


def render_dot(dot: str, output_path: Path):
    """
    Render a DOT description to an image with Graphviz.

    The format comes from the file extension (svg, png or pdf, svg otherwise).
    """
    graphs = pydot.graph_from_dot_data(dot)
    if not graphs:
        raise ValueError("Could not parse the DOT description")

    ext = output_path.suffix.lower().lstrip(".")
    if ext not in ("png", "svg", "pdf"):
        ext = "svg"

    graphs[0].write(str(output_path), format=ext)
    print(f"Graph saved to {output_path}")
