"""
Построение блок-схемы из размеченных элементов

Один проход по элементам:
- каждый элемент -> один узел (id node-1, node-2, ...)
- заголовок уровня L связывается с последним заголовком уровня L-1 ("contains")
- абзац/список связывается с текущим заголовком ("content"/"list"),
  а если заголовка ещё не было - с предыдущим узлом ("follows")
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .models import (
    ContentItem, ItemKind, ListItem, VisualKind, EdgeLabel,
    GraphNode, GraphEdge, FlowGraph, Position, is_heading,
)
from .text_structurer import split_paragraphs

logger = logging.getLogger(__name__)


# Длина подписи по типу элемента
HEADING_LABEL_LENGTH = 40
PARAGRAPH_LABEL_LENGTH = 30

# Начальная вертикальная раскладка
NODE_X = 250
NODE_Y_OFFSET = 100
NODE_Y_STEP = 150

LIST_DESCRIPTION_SEPARATOR = "\n• "

VISUAL_KINDS = {
    ItemKind.TITLE: VisualKind.ACCENT_A,
    ItemKind.HEADER: VisualKind.ACCENT_B,
    ItemKind.LIST: VisualKind.ACCENT_C,
    ItemKind.PARAGRAPH: VisualKind.ACCENT_B,
}

BODY_EDGE_LABELS = {
    ItemKind.LIST: EdgeLabel.LIST,
    ItemKind.PARAGRAPH: EdgeLabel.CONTENT,
}

# Простая схема: максимум абзацев и чередование типов
SIMPLE_FLOW_MAX_PARAGRAPHS = 10
SIMPLE_FLOW_KINDS = [VisualKind.ACCENT_A, VisualKind.ACCENT_B, VisualKind.ACCENT_C]


def truncate_label(text: str, max_length: int) -> str:
    """Обрезать подпись с многоточием"""
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def initial_position(index: int) -> Position:
    return Position(x=NODE_X, y=NODE_Y_OFFSET + index * NODE_Y_STEP)


def node_id(number: int) -> str:
    return f"node-{number}"


def _label_and_description(item: ContentItem):
    if isinstance(item, ListItem):
        return (
            f"List ({len(item.items)} items)",
            LIST_DESCRIPTION_SEPARATOR.join(item.items),
        )
    bound = HEADING_LABEL_LENGTH if is_heading(item) else PARAGRAPH_LABEL_LENGTH
    return truncate_label(item.text, bound), item.text


@dataclass
class _AssemblyState:
    """Состояние прохода (живёт только внутри одного build_flow)"""
    graph: FlowGraph = field(default_factory=FlowGraph)
    last_node_id: Optional[str] = None
    current_header_id: Optional[str] = None
    header_by_level: Dict[int, str] = field(default_factory=dict)


def _add_item(state: _AssemblyState, item: ContentItem) -> _AssemblyState:
    index = len(state.graph.nodes)
    new_id = node_id(index + 1)
    label, description = _label_and_description(item)

    state.graph.add_node(GraphNode(
        id=new_id,
        visual_kind=VISUAL_KINDS[item.kind],
        label=label,
        description=description,
        position=initial_position(index),
    ))

    if is_heading(item):
        state.header_by_level[item.level] = new_id
        parent_id = state.header_by_level.get(item.level - 1) if item.level > 0 else None
        if parent_id:
            state.graph.add_edge(GraphEdge(
                source=parent_id, target=new_id, label=EdgeLabel.CONTAINS
            ))
        state.current_header_id = new_id
    elif state.current_header_id:
        state.graph.add_edge(GraphEdge(
            source=state.current_header_id, target=new_id, label=BODY_EDGE_LABELS[item.kind]
        ))
    elif state.last_node_id:
        state.graph.add_edge(GraphEdge(
            source=state.last_node_id, target=new_id, label=EdgeLabel.FOLLOWS
        ))

    state.last_node_id = new_id
    return state


def build_flow(items: Sequence[ContentItem]) -> FlowGraph:
    """
    Построить блок-схему из элементов

    Args:
        items: элементы (уже приоритизированные)

    Returns:
        FlowGraph: узлы в порядке элементов, связи в порядке создания узлов
    """
    state = _AssemblyState()
    for item in items:
        state = _add_item(state, item)

    logger.debug(f"Схема: узлов {len(state.graph.nodes)}, связей {len(state.graph.edges)}")
    return state.graph


def build_simple_flow(text: str) -> FlowGraph:
    """
    Простая схема: абзацы по порядку, соединённые цепочкой

    Берутся строки длиннее 20 символов (не более 10), типы узлов чередуются.
    """
    paragraphs = split_paragraphs(text, limit=SIMPLE_FLOW_MAX_PARAGRAPHS)
    graph = FlowGraph()

    for index, paragraph in enumerate(paragraphs):
        graph.add_node(GraphNode(
            id=node_id(index + 1),
            visual_kind=SIMPLE_FLOW_KINDS[index % len(SIMPLE_FLOW_KINDS)],
            label=truncate_label(paragraph, PARAGRAPH_LABEL_LENGTH),
            description=paragraph,
            position=initial_position(index),
        ))

    edge_count = max(0, len(paragraphs) - 1)
    for index in range(edge_count):
        if index == 0:
            label = EdgeLabel.START
        elif index == edge_count - 1:
            label = EdgeLabel.END
        else:
            label = EdgeLabel.FOLLOWS
        graph.add_edge(GraphEdge(
            id=f"edge-{index + 1}-{index + 2}",
            source=node_id(index + 1),
            target=node_id(index + 2),
            label=label,
        ))

    return graph
