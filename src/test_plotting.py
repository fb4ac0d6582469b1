import shutil

import pytest

from colors import add_colors
from layout import sort_data
from plotting import build_dot, generate_dot, generate_dot_data, render_dot

ROUND_TRIP = {
    "first_year": 2020,
    "children_tree": [
        {"A": {"children": ["X", "Y"]}},
        {"X": {"children": []}, "Y": {"children": []}},
    ],
}


def _name(obj) -> str:
    return obj.get_name().strip('"')


def _nodes(P) -> dict:
    return {_name(n): n for n in P.get_nodes()}


def _edges(P) -> dict:
    return {
        (e.get_source().strip('"'), e.get_destination().strip('"')): e for e in P.get_edges()
    }


def _dot(data, **kwargs):
    children_tree = data["children_tree"]
    generations = add_colors(sort_data(children_tree))
    return build_dot(generations, data["first_year"], len(children_tree), **kwargs)


def test_round_trip_two_generations():
    P = _dot(ROUND_TRIP)
    nodes = _nodes(P)

    people = [n for n in nodes if n.rsplit("_", 1)[-1].isdigit()]
    visible = sorted(n for n in people if nodes[n].get("style") != "invis")
    invisible = sorted(n for n in people if nodes[n].get("style") == "invis")

    assert visible == ["A_0", "X_1", "Y_1"]
    assert invisible == ["inv_X_2", "inv_Y_2"]

    solid = sorted(key for key, e in _edges(P).items() if e.get("weight") == "1000")
    assert solid == [("A_0", "X_1"), ("A_0", "Y_1")]

    assert "1ère génération</B> (2020-2025)" in nodes["gen label 0"].get("label")
    assert "2ème génération</B> (2021-2026)" in nodes["gen label 1"].get("label")
    # The trailing spacer generation has no label
    assert "gen label 2" not in nodes


def test_generate_dot_text():
    dot = generate_dot(ROUND_TRIP)

    assert dot.startswith("digraph")
    assert "rankdir=TB" in dot
    assert "splines=spline" in dot
    assert "anchor_invisible" in dot
    assert "1ère génération" in dot
    assert "(2020-2025)" in dot
    assert "rank=same" in dot


def test_invisible_edges_and_helper_chain():
    edges = _edges(_dot(ROUND_TRIP))

    assert edges[("X_1", "inv_X_2")].get("style") == "invis"
    assert edges[("X_1", "inv_X_2")].get("weight") == "500"
    assert ("anchor_invisible", "spacer 0") in edges
    assert ("spacer 0", "spacer 1") in edges
    assert ("spacer 1", "gen label 1") in edges


def test_ordering_edges_follow_final_order():
    edges = _edges(_dot(ROUND_TRIP))

    order = edges[("Y_1", "X_1")]
    assert order.get("style") == "invis"
    assert order.get("minlen") == "1"
    assert order.get("weight") == "1"
    assert ("X_1", "Y_1") not in edges


def test_ordering_gap_between_trees():
    data = {"first_year": 1990, "children_tree": [{"A": {"children": []}, "B": {"children": []}}]}
    edges = _edges(_dot(data))

    # Two trees of two people each (one invisible child apiece)
    assert float(edges[("A_0", "B_0")].get("minlen")) == pytest.approx(2.8)
    assert float(edges[("inv_A_1", "inv_B_1")].get("minlen")) == pytest.approx(2.8)


def test_rank_subgraphs():
    P = _dot(ROUND_TRIP)
    subgraphs = {_name(sg): sg for sg in P.get_subgraphs()}

    assert sorted(subgraphs) == ["rank_0", "rank_1", "rank_2"]
    assert subgraphs["rank_0"].get("rank") == "same"
    assert sorted(_name(n) for n in subgraphs["rank_0"].get_nodes()) == ["A_0", "gen label 0", "spacer 0"]
    assert sorted(_name(n) for n in subgraphs["rank_2"].get_nodes()) == ["inv_X_2", "inv_Y_2"]


def test_person_styles():
    data = {
        "first_year": 2000,
        "children_tree": [
            {
                "Boss": {"children": [], "title": "Resp"},
                "Helper": {"children": [], "title": "Trésorier"},
                "Plain": {"children": []},
            }
        ],
    }
    nodes = _nodes(_dot(data))

    assert nodes["Boss_0"].get("penwidth") == "4"
    assert nodes["Helper_0"].get("penwidth") == "2.5"
    assert "Trésorier" in nodes["Helper_0"].get("label")
    assert nodes["Plain_0"].get("penwidth") == "1"
    assert nodes["Plain_0"].get("label") == "<Plain>"
    assert nodes["Boss_0"].get("fillcolor").startswith("#")
    assert nodes["Boss_0"].get("fontcolor") in ("black", "white")


def test_debug_labels():
    nodes = _nodes(_dot(ROUND_TRIP, show_debug_infos=True))

    assert "joins: 0" in nodes["A_0"].get("label")
    assert "[0]" in nodes["A_0"].get("label")


def test_same_name_in_two_generations():
    data = {
        "first_year": 2000,
        "children_tree": [{"Sam": {"children": ["Sam"]}}, {"Sam": {"children": []}}],
    }
    nodes = _nodes(_dot(data))

    assert "Sam_0" in nodes
    assert "Sam_1" in nodes


def test_people_named_like_helpers_keep_their_own_nodes():
    data = {
        "first_year": 2000,
        "children_tree": [{"spacer": {"children": []}, "gen_label": {"children": []}}],
    }
    P = _dot(data)
    names = [_name(n) for n in P.get_nodes()]
    nodes = _nodes(P)

    for node_id in ("spacer_0", "gen_label_0"):
        assert names.count(node_id) == 1
        assert nodes[node_id].get("style") == "filled,rounded"
        assert nodes[node_id].get("penwidth") == "1"

    assert nodes["spacer 0"].get("style") == "invis"
    assert "génération" in nodes["gen label 0"].get("label")

    rank_0 = [sg for sg in P.get_subgraphs() if _name(sg) == "rank_0"][0]
    assert sorted(_name(n) for n in rank_0.get_nodes()) == [
        "gen label 0",
        "gen_label_0",
        "spacer 0",
        "spacer_0",
    ]


def test_empty_tree():
    dot, generations = generate_dot_data({"first_year": 2020, "children_tree": []})

    assert generations == []
    assert "anchor_invisible" in dot
    assert "génération" not in dot


@pytest.mark.skipif(shutil.which("dot") is None, reason="Graphviz is not installed")
def test_render_dot(tmp_path):
    output = tmp_path / "tree.svg"
    render_dot(generate_dot(ROUND_TRIP), output)

    assert output.exists()
    assert "<svg" in output.read_text()
