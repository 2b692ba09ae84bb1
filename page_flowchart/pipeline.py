"""
Pipeline - от контента страницы до блок-схемы

Источники элементов (все отдают одинаковый List[ContentItem]):
- TextPatternSource: плоский текст + паттерны
- StructuredItemsSource: готовые элементы из DOM (например, от краулера)
- HtmlDocumentSource: HTML, разбор по тегам

Дальше общий путь: приоритизация -> построение схемы.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .models import ContentItem, TitleItem, ItemKind, FlowGraph
from .text_structurer import structure_text
from .dom_extractor import extract_page
from .prioritizer import prioritize_items
from .flow_builder import build_flow

logger = logging.getLogger(__name__)


class ItemSource(ABC):
    """Источник размеченных элементов"""

    @abstractmethod
    def items(self) -> List[ContentItem]:
        """Элементы в порядке документа"""


class TextPatternSource(ItemSource):
    """Разметка плоского текста по паттернам"""

    def __init__(self, text: str, title: str = ""):
        self.text = text or ""
        self.title = title or ""

    def items(self) -> List[ContentItem]:
        return structure_text(self.text, self.title)


class StructuredItemsSource(ItemSource):
    """
    Готовые элементы из DOM

    Заголовок страницы добавляется первым, если первый элемент
    не заголовок и не совпадает с ним по тексту.
    """

    def __init__(self, structured_items: Sequence[ContentItem], title: str = ""):
        self.structured_items = list(structured_items)
        self.title = title or ""

    def _needs_title(self) -> bool:
        if not self.title:
            return False
        if not self.structured_items:
            return True
        first = self.structured_items[0]
        if first.kind in (ItemKind.TITLE, ItemKind.HEADER):
            return False
        return getattr(first, "text", None) != self.title

    def items(self) -> List[ContentItem]:
        prefix: List[ContentItem] = [TitleItem(text=self.title)] if self._needs_title() else []
        return prefix + self.structured_items


class HtmlDocumentSource(ItemSource):
    """Разбор HTML по тегам (с запасным разбором текста)"""

    def __init__(self, html: str, title: str = "", clean: bool = True):
        self.html = html or ""
        self.title = title or ""
        self.clean = clean

    def items(self) -> List[ContentItem]:
        page = extract_page(self.html, clean=self.clean)
        return StructuredItemsSource(page.items, self.title or page.title).items()


def build_flowchart_from_source(source: ItemSource) -> FlowGraph:
    """Общий путь: элементы -> приоритизация -> схема"""
    items = source.items()
    prioritized = prioritize_items(items)
    graph = build_flow(prioritized)
    logger.info(
        f"{source.__class__.__name__}: элементов {len(items)}, "
        f"узлов {len(graph.nodes)}, связей {len(graph.edges)}"
    )
    return graph


def select_source(text: str = "", title: str = "",
                  structured_items: Optional[Sequence[ContentItem]] = None) -> ItemSource:
    """Готовые элементы имеют приоритет над разметкой текста"""
    if structured_items:
        return StructuredItemsSource(structured_items, title)
    return TextPatternSource(text, title)


def build_flowchart(text: str = "", title: str = "",
                    structured_items: Optional[Sequence[ContentItem]] = None) -> FlowGraph:
    """
    Построить блок-схему из текста или готовых элементов

    Args:
        text: плоский текст страницы
        title: заголовок страницы
        structured_items: элементы из DOM (если есть - текст не размечается)

    Returns:
        FlowGraph (пустой для пустого ввода)
    """
    return build_flowchart_from_source(select_source(text, title, structured_items))


def build_flowchart_from_html(html: str, title: str = "", clean: bool = True) -> FlowGraph:
    """Построить блок-схему из HTML"""
    return build_flowchart_from_source(HtmlDocumentSource(html, title, clean=clean))
