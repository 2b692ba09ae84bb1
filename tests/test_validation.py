import json

import pytest

from page_flowchart.errors import FlowchartFormatError
from page_flowchart.models import GraphEdge, EdgeLabel, VisualKind
from page_flowchart.validation import creates_cycle, is_acyclic, parse_flowchart_json


CHAIN = [
    {"source": "a", "target": "b"},
    {"source": "b", "target": "c"},
]


def test_new_edge_closing_loop_is_detected():
    assert creates_cycle(CHAIN, "c", "a") is True
    assert creates_cycle(CHAIN, "a", "c") is False


def test_self_loop_is_a_cycle():
    assert creates_cycle([], "a", "a") is True


def test_graph_edges_are_accepted():
    edges = [
        GraphEdge(source="node-1", target="node-2", label=EdgeLabel.CONTAINS),
        GraphEdge(source="node-2", target="node-3", label=EdgeLabel.CONTENT),
    ]
    assert creates_cycle(edges, "node-3", "node-1") is True
    assert is_acyclic(edges) is True


def test_is_acyclic():
    assert is_acyclic([]) is True
    assert is_acyclic(CHAIN) is True
    assert is_acyclic(CHAIN + [{"source": "c", "target": "b"}]) is False


def test_diamond_is_not_a_cycle():
    diamond = [
        {"source": "a", "target": "b"},
        {"source": "a", "target": "c"},
        {"source": "b", "target": "d"},
        {"source": "c", "target": "d"},
    ]
    assert is_acyclic(diamond) is True
    assert creates_cycle(diamond, "d", "a") is True


def _document():
    return {
        "nodes": [{
            "id": "node-1",
            "type": "custom",
            "position": {"x": 250, "y": 100},
            "data": {"label": "Title", "type": "typeA", "description": "Title"},
        }],
        "edges": [{
            "id": "edge-node-1-node-2",
            "source": "node-1",
            "target": "node-2",
            "data": {"label": "content"},
        }],
        "viewport": {"x": 0, "y": 0, "zoom": 1},
    }


def test_parse_valid_document():
    document = parse_flowchart_json(json.dumps(_document()))

    assert document.nodes[0].data.type == VisualKind.ACCENT_A
    assert document.nodes[0].data.description == "Title"
    assert document.edges[0].data.label == "content"
    assert document.viewport.zoom == 1


def test_parse_empty_returns_none():
    assert parse_flowchart_json("") is None
    assert parse_flowchart_json("   ") is None


def test_parse_invalid_json():
    with pytest.raises(FlowchartFormatError):
        parse_flowchart_json("{not json")


@pytest.mark.parametrize("mutate", [
    lambda doc: doc.pop("viewport"),
    lambda doc: doc["nodes"][0]["data"].update(type="typeZ"),
    lambda doc: doc["nodes"][0].pop("position"),
    lambda doc: doc["edges"][0].pop("target"),
])
def test_parse_invalid_structure(mutate):
    document = _document()
    mutate(document)
    with pytest.raises(FlowchartFormatError):
        parse_flowchart_json(json.dumps(document))
