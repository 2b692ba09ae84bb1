"""
DOM Extractor - извлечение структуры из очищенного HTML

Использует семантику тегов вместо эвристик:
- h1..h6 -> заголовки с уровнем по номеру тега
- p -> абзацы (длиннее порога)
- ul/ol -> списки (пункты = дочерние li)

Порядок элементов - порядок документа (вложенность не учитывается).
Если теги ничего не дали - запасной вариант по плоскому тексту.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from .models import ContentItem, HeaderItem, ListItem, ParagraphItem
from .text_structurer import split_paragraphs

logger = logging.getLogger(__name__)


# Абзац из тега <p> должен быть длиннее
MIN_TAG_PARAGRAPH_LENGTH = 10

# Порог для запасного разбора плоского текста
FALLBACK_PARAGRAPH_LENGTH = 30

STRUCTURE_SELECTOR = "h1, h2, h3, h4, h5, h6, p, ul, ol"

# Кандидаты на основной контент (в порядке приоритета)
MAIN_CONTENT_SELECTORS = ["article", "main", ".content", ".article"]

# Шумовые элементы (навигация, реклама, скрипты)
NOISE_SELECTOR = (
    "script, style, nav, header, footer, aside, iframe, noscript, "
    ".ads, .navigation, .menu, .sidebar"
)

# Блочные теги: границы блоков плоского текста
BLOCK_TAGS = frozenset([
    "address", "article", "aside", "blockquote", "body", "br", "caption",
    "dd", "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer",
    "form", "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr", "li",
    "main", "nav", "ol", "p", "pre", "section", "table", "tbody", "td",
    "tfoot", "th", "thead", "tr", "ul",
])

# Теги, текст которых не попадает в плоский текст
SKIP_TAGS = frozenset(["script", "style", "noscript", "template"])

HEADING_TAG_RE = re.compile(r'^h([1-6])$')
WHITESPACE_RE = re.compile(r'\s+')


@dataclass
class ExtractedPage:
    """Результат разбора HTML"""
    title: str
    clean_text: str
    items: List[ContentItem] = field(default_factory=list)
    used_fallback: bool = False


def _to_soup(html: Union[str, BeautifulSoup, Tag]) -> Union[BeautifulSoup, Tag]:
    if isinstance(html, (BeautifulSoup, Tag)):
        return html
    return BeautifulSoup(html or "", "html.parser")


def _collapse(text: str) -> str:
    return WHITESPACE_RE.sub(" ", text or "").strip()


# =============================================================================
# Очистка документа
# =============================================================================

def find_main_content(soup: BeautifulSoup) -> Union[BeautifulSoup, Tag]:
    """Найти элемент основного контента (article, main, ... или body)"""
    for selector in MAIN_CONTENT_SELECTORS:
        element = soup.select_one(selector)
        if element is not None:
            return element
    return soup.body or soup


def remove_noise(root: Union[BeautifulSoup, Tag]) -> int:
    """
    Удалить шумовые элементы

    Returns:
        Количество удалённых элементов
    """
    removed = 0
    for element in root.select(NOISE_SELECTOR):
        # Элемент мог быть удалён вместе с родителем
        if element.decomposed:
            continue
        element.decompose()
        removed += 1
    return removed


def extract_title(soup: BeautifulSoup) -> str:
    """Заголовок страницы: <title>, иначе первый <h1>"""
    if soup.title and soup.title.get_text(strip=True):
        return _collapse(soup.title.get_text())
    h1 = soup.find("h1")
    if h1 is not None:
        return _collapse(h1.get_text())
    return ""


def _flush_block(blocks: List[str], current: List[str]):
    text = _collapse("".join(current))
    if text:
        blocks.append(text)
    current.clear()


def _collect_blocks(element: Union[BeautifulSoup, Tag], blocks: List[str], current: List[str]):
    for child in element.children:
        if isinstance(child, Tag):
            if child.name in SKIP_TAGS:
                continue
            if child.name in BLOCK_TAGS:
                _flush_block(blocks, current)
                _collect_blocks(child, blocks, current)
                _flush_block(blocks, current)
            else:
                # Строчные теги (a, b, span, ...) не разрывают блок
                _collect_blocks(child, blocks, current)
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            current.append(str(child))


def extract_clean_text(root: Union[BeautifulSoup, Tag]) -> str:
    """
    Плоский текст: блоки через пустую строку, пробелы внутри блока схлопнуты

    Блок - текст между границами блочных тегов (p, div, li, h1..h6, br, ...).
    """
    blocks: List[str] = []
    current: List[str] = []
    _collect_blocks(root, blocks, current)
    _flush_block(blocks, current)
    return "\n\n".join(blocks)


# =============================================================================
# Извлечение структуры
# =============================================================================

def extract_structured_items(html: Union[str, BeautifulSoup, Tag]) -> List[ContentItem]:
    """
    Извлечь элементы по тегам в порядке документа

    Args:
        html: очищенный HTML (строка или уже разобранный документ)

    Returns:
        Список заголовков, абзацев и списков
    """
    root = _to_soup(html)
    items: List[ContentItem] = []

    for element in root.select(STRUCTURE_SELECTOR):
        name = element.name.lower()

        heading = HEADING_TAG_RE.match(name)
        if heading:
            text = _collapse(element.get_text())
            if text:
                items.append(HeaderItem(text=text, level=int(heading.group(1))))
            continue

        if name == "p":
            text = _collapse(element.get_text())
            if len(text) > MIN_TAG_PARAGRAPH_LENGTH:
                items.append(ParagraphItem(text=text))
            continue

        # ul / ol
        entries = [_collapse(li.get_text(" ")) for li in element.find_all("li", recursive=False)]
        items.append(ListItem(items=tuple(entry for entry in entries if entry)))

    return items


def extract_fallback_items(text: str) -> List[ContentItem]:
    """Запасной вариант: только абзацы длиннее FALLBACK_PARAGRAPH_LENGTH"""
    return [
        ParagraphItem(text=paragraph)
        for paragraph in split_paragraphs(text, min_length=FALLBACK_PARAGRAPH_LENGTH)
    ]


def extract_page(html: str, clean: bool = True) -> ExtractedPage:
    """
    Полный разбор HTML страницы

    Args:
        html: исходный HTML
        clean: выделить основной контент и удалить шум

    Returns:
        ExtractedPage с заголовком, плоским текстом и элементами
    """
    soup = _to_soup(html)
    title = extract_title(soup)

    root = soup
    if clean:
        root = find_main_content(soup)
        removed = remove_noise(root)
        logger.debug(f"Удалено шумовых элементов: {removed}")

    clean_text = extract_clean_text(root)
    items = extract_structured_items(root)

    page = ExtractedPage(title=title, clean_text=clean_text, items=items)
    if not items and clean_text:
        page.items = extract_fallback_items(clean_text)
        page.used_fallback = True
        logger.info(f"Теги не дали структуры, запасной разбор: {len(page.items)} абзацев")

    logger.info(
        f"[STRUCTURE_EXTRACTOR] Текст: {len(clean_text)} символов, элементов: {len(page.items)}"
    )
    return page
