"""
Проверки блок-схемы

- Циклы: можно ли добавить связь без образования цикла
- Импорт JSON: структура {nodes, edges, viewport}
"""

import json
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set, Union, Any

from pydantic import BaseModel, ConfigDict, ValidationError

from .models import GraphEdge, VisualKind
from .errors import FlowchartFormatError


EdgeLike = Union[GraphEdge, Dict[str, Any]]


def _endpoints(edge: EdgeLike):
    if isinstance(edge, dict):
        return edge["source"], edge["target"]
    return edge.source, edge.target


def _adjacency(edges: Iterable[EdgeLike]) -> Dict[str, List[str]]:
    graph: Dict[str, List[str]] = defaultdict(list)
    for edge in edges:
        source, target = _endpoints(edge)
        graph[source].append(target)
    return graph


def _has_cycle_from(graph: Dict[str, List[str]], start: str, visited: Set[str]) -> bool:
    """DFS без рекурсии: цикл = вершина повторилась на текущем пути"""
    path: Set[str] = set()
    stack = [(start, iter(graph.get(start, ())))]
    visited.add(start)
    path.add(start)

    while stack:
        node, neighbors = stack[-1]
        advanced = False
        for neighbor in neighbors:
            if neighbor in path:
                return True
            if neighbor not in visited:
                visited.add(neighbor)
                path.add(neighbor)
                stack.append((neighbor, iter(graph.get(neighbor, ()))))
                advanced = True
                break
        if not advanced:
            path.discard(node)
            stack.pop()

    return False


def creates_cycle(edges: Iterable[EdgeLike], source: str, target: str) -> bool:
    """
    Проверить, образует ли новая связь source -> target цикл

    Args:
        edges: существующие связи (GraphEdge или словари с source/target)
        source: начало новой связи
        target: конец новой связи
    """
    graph = _adjacency(edges)
    graph[source].append(target)
    return _has_cycle_from(graph, source, set())


def is_acyclic(edges: Iterable[EdgeLike]) -> bool:
    """Проверить весь набор связей на отсутствие циклов"""
    graph = _adjacency(edges)
    visited: Set[str] = set()
    for node in list(graph):
        if node not in visited and _has_cycle_from(graph, node, visited):
            return False
    return True


# =============================================================================
# Импорт JSON
# =============================================================================

class PositionModel(BaseModel):
    x: float
    y: float


class NodeDataModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    label: str
    type: VisualKind
    url: Optional[str] = None
    comments: Optional[str] = None


class NodeModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    position: PositionModel
    data: NodeDataModel


class EdgeDataModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    label: Optional[str] = None


class EdgeModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    source: str
    target: str
    data: Optional[EdgeDataModel] = None


class ViewportModel(BaseModel):
    x: float
    y: float
    zoom: float


class FlowchartDocument(BaseModel):
    """Сохранённая блок-схема редактора"""
    nodes: List[NodeModel]
    edges: List[EdgeModel]
    viewport: ViewportModel


def parse_flowchart_json(raw: str) -> Optional[FlowchartDocument]:
    """
    Разобрать и проверить JSON блок-схемы

    Returns:
        FlowchartDocument или None для пустой строки

    Raises:
        FlowchartFormatError: невалидный JSON или структура
    """
    if not raw or not raw.strip():
        return None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise FlowchartFormatError(f"Invalid JSON: {e}") from e

    try:
        return FlowchartDocument.model_validate(data)
    except ValidationError as e:
        raise FlowchartFormatError(f"Invalid flowchart data: {e.error_count()} error(s)") from e
