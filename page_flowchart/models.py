"""
Модели данных для построения блок-схемы страницы

Элементы контента (ContentItem) - размеченные единицы текста страницы:
заголовок документа, заголовки разделов, списки и абзацы.
Граф (FlowGraph) - узлы и связи для редактора диаграмм.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple, Union, Any, ClassVar
from enum import Enum


class ItemKind(Enum):
    """Типы элементов контента"""
    TITLE = "title"
    HEADER = "header"
    LIST = "list"
    PARAGRAPH = "paragraph"


class VisualKind(Enum):
    """Визуальные типы узлов (значения понимает редактор)"""
    ACCENT_A = "typeA"  # Заголовок документа
    ACCENT_B = "typeB"  # Заголовки разделов и абзацы
    ACCENT_C = "typeC"  # Списки


class EdgeLabel(Enum):
    """Подписи связей"""
    CONTAINS = "contains"  # Заголовок -> подзаголовок
    CONTENT = "content"    # Заголовок -> абзац
    LIST = "list"          # Заголовок -> список
    FOLLOWS = "follows"    # Последовательная связь без заголовка
    START = "start"        # Простая схема: первая связь
    END = "end"            # Простая схема: последняя связь


# =============================================================================
# Элементы контента
# =============================================================================

@dataclass(frozen=True)
class TitleItem:
    """Заголовок документа (всегда level 0)"""
    text: str
    kind: ClassVar[ItemKind] = ItemKind.TITLE

    @property
    def level(self) -> int:
        return 0


@dataclass(frozen=True)
class HeaderItem:
    """Заголовок раздела"""
    text: str
    level: int  # 1 - верхний раздел, 2+ - вложенные
    kind: ClassVar[ItemKind] = ItemKind.HEADER


@dataclass(frozen=True)
class ListItem:
    """Список (маркированный или нумерованный)"""
    items: Tuple[str, ...] = ()
    kind: ClassVar[ItemKind] = ItemKind.LIST


@dataclass(frozen=True)
class ParagraphItem:
    """Абзац текста"""
    text: str
    kind: ClassVar[ItemKind] = ItemKind.PARAGRAPH


ContentItem = Union[TitleItem, HeaderItem, ListItem, ParagraphItem]
HeadingItem = Union[TitleItem, HeaderItem]


def is_heading(item: ContentItem) -> bool:
    """Заголовок документа или раздела"""
    return item.kind in (ItemKind.TITLE, ItemKind.HEADER)


def content_item_from_dict(data: Dict[str, Any]) -> ContentItem:
    """
    Собрать элемент из словаря формата {type, text, items, level}

    Raises:
        ValueError: неизвестный type
    """
    item_type = (data.get("type") or "").lower()
    text = data.get("text") or ""

    if item_type == ItemKind.TITLE.value:
        return TitleItem(text=text)
    if item_type == ItemKind.HEADER.value:
        level = data.get("level")
        # Заголовок без уровня считаем разделом верхнего уровня
        return HeaderItem(text=text, level=int(level) if level is not None else 1)
    if item_type == ItemKind.LIST.value:
        return ListItem(items=tuple(str(i) for i in (data.get("items") or [])))
    if item_type == ItemKind.PARAGRAPH.value:
        return ParagraphItem(text=text)

    raise ValueError(f"Неизвестный тип элемента: {data.get('type')!r}")


def content_item_to_dict(item: ContentItem) -> Dict[str, Any]:
    """Конвертация элемента в словарь для JSON"""
    if isinstance(item, ListItem):
        return {"type": item.kind.value, "items": list(item.items)}
    data = {"type": item.kind.value, "text": item.text}
    if is_heading(item):
        data["level"] = item.level
    return data


# =============================================================================
# Граф
# =============================================================================

HANDLE_COUNTS = {"top": 1, "bottom": 1, "left": 1, "right": 1}


@dataclass(frozen=True)
class Position:
    """Начальная позиция узла (перезаписывается автораскладкой)"""
    x: float
    y: float


@dataclass(frozen=True)
class GraphNode:
    """Узел блок-схемы"""
    id: str
    visual_kind: VisualKind
    label: str         # Короткая подпись
    description: str   # Полный текст
    position: Position

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": "custom",
            "position": {"x": self.position.x, "y": self.position.y},
            "data": {
                "label": self.label,
                "description": self.description,
                "type": self.visual_kind.value,
                "handleCounts": dict(HANDLE_COUNTS),
                "flipped": False,
            },
        }


@dataclass(frozen=True)
class GraphEdge:
    """Связь между узлами"""
    source: str
    target: str
    label: EdgeLabel
    id: Optional[str] = None

    @property
    def edge_id(self) -> str:
        return self.id or f"edge-{self.source}-{self.target}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.edge_id,
            "source": self.source,
            "target": self.target,
            "type": "custom",
            "data": {"label": self.label.value},
        }


@dataclass
class FlowGraph:
    """Блок-схема: узлы и связи"""
    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)

    def add_node(self, node: GraphNode):
        self.nodes.append(node)

    def add_edge(self, edge: GraphEdge):
        self.edges.append(edge)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        """Формат React Flow: {nodes, edges}"""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }
