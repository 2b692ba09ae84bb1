"""
Разметка плоского текста страницы по паттернам

Разбивает текст на строки и классифицирует каждую строку:
- Заголовки (китайская нумерация глав, "一、", "1.", "A.")
- Пункты списков (маркеры, (1), 1), a))
- Абзацы (строки длиннее порога)

Короткие строки без совпадений считаются шумом и отбрасываются.
"""

import re
import logging
from dataclasses import dataclass
from typing import List, Optional, Pattern

from .models import (
    ContentItem, TitleItem, HeaderItem, ListItem, ParagraphItem,
)

logger = logging.getLogger(__name__)


# Максимум элементов, которые отдаёт разметчик
MAX_ITEMS = 15

# Строки короче (или равные) считаются шумом
MIN_PARAGRAPH_LENGTH = 20


# =============================================================================
# Таблицы паттернов (порядок = приоритет, побеждает первое совпадение)
# =============================================================================

@dataclass(frozen=True)
class HeaderRule:
    """Правило распознавания заголовка"""
    name: str
    regex: Pattern
    level: int

    def match(self, line: str) -> Optional[HeaderItem]:
        found = self.regex.match(line)
        if not found:
            return None
        return HeaderItem(text=found.group(2) or found.group(0), level=self.level)


@dataclass(frozen=True)
class ListRule:
    """Правило распознавания пункта списка"""
    name: str
    regex: Pattern

    def match(self, line: str) -> Optional[str]:
        found = self.regex.match(line)
        if not found:
            return None
        # Текст пункта - последняя группа
        return found.group(found.re.groups) or found.group(0)


HEADER_RULES = [
    # 第一章：概述 / 第3节 标题
    HeaderRule("cn_chapter", re.compile(r'^(第[一二三四五六七八九十0-9]+[章节篇部])[：:\s]+(.+)$'), 1),
    # 一、背景 / 二. 目标
    HeaderRule("cn_numeral", re.compile(r'^([一二三四五六七八九十]{1,2}[、.\s]+)(.+)$'), 2),
    # 1. Введение / 2 Цели (только ASCII цифры)
    HeaderRule("arabic", re.compile(r'^([0-9]+[.\s]+)(.+)$'), 2),
    # A. Раздел / a. раздел (только латиница ASCII, без учёта регистра)
    HeaderRule("latin_letter", re.compile(r'^([A-Za-z][.\s]+)(.+)$'), 2),
]

LIST_RULES = [
    # • пункт / - пункт / * пункт
    ListRule("bullet", re.compile(r'^[•\-*+◦○●♦※]\s+(.+)$')),
    # (1) пункт / 1) пункт
    ListRule("numbered", re.compile(r'^(\([0-9]+\)|[0-9]+\))\s+(.+)$')),
    # a) пункт / a. пункт
    ListRule("lettered", re.compile(r'^([A-Za-z](\)|\.))\s+(.+)$')),
]

LINE_SPLIT_RE = re.compile(r'\n+')


def match_header(line: str) -> Optional[HeaderItem]:
    """Первое совпавшее правило заголовка или None"""
    for rule in HEADER_RULES:
        header = rule.match(line)
        if header is not None:
            return header
    return None


def match_list_entry(line: str) -> Optional[str]:
    """Текст пункта списка по первому совпавшему правилу или None"""
    for rule in LIST_RULES:
        entry = rule.match(line)
        if entry is not None:
            return entry
    return None


# =============================================================================
# Разметка
# =============================================================================

def structure_text(text: str, title: str = "", max_items: int = MAX_ITEMS) -> List[ContentItem]:
    """
    Разметить плоский текст в последовательность элементов

    Args:
        text: текст страницы
        title: заголовок страницы (добавляется первым элементом)
        max_items: ограничение на число элементов

    Returns:
        Список элементов в порядке документа (не более max_items)
    """
    items: List[ContentItem] = []
    if title:
        items.append(TitleItem(text=title))

    pending_list: List[str] = []

    def flush_list():
        if pending_list:
            items.append(ListItem(items=tuple(pending_list)))
            pending_list.clear()

    dropped = 0
    for raw_line in LINE_SPLIT_RE.split(text or ""):
        line = raw_line.strip()
        if not line:
            continue

        header = match_header(line)
        if header is not None:
            flush_list()
            items.append(header)
            continue

        entry = match_list_entry(line)
        if entry is not None:
            pending_list.append(entry)
            continue

        if len(line) > MIN_PARAGRAPH_LENGTH:
            flush_list()
            items.append(ParagraphItem(text=line))
        else:
            dropped += 1

    flush_list()

    if dropped:
        logger.debug(f"Отброшено коротких строк: {dropped}")
    if len(items) > max_items:
        logger.info(f"Разметка: {len(items)} элементов, оставляем первые {max_items}")

    return items[:max_items]


def split_paragraphs(text: str, min_length: int = MIN_PARAGRAPH_LENGTH,
                     limit: Optional[int] = None) -> List[str]:
    """
    Упрощённая разметка: только абзацы

    Args:
        text: исходный текст
        min_length: минимальная длина абзаца (строго больше)
        limit: максимум абзацев (None - без ограничения)
    """
    paragraphs = [
        line.strip() for line in LINE_SPLIT_RE.split(text or "")
        if len(line.strip()) > min_length
    ]
    return paragraphs[:limit] if limit is not None else paragraphs
