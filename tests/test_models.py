import dataclasses

import pytest

from page_flowchart.models import (
    TitleItem, HeaderItem, ListItem, ParagraphItem, ItemKind,
    content_item_from_dict, content_item_to_dict, is_heading,
)


def test_items_from_dicts():
    assert content_item_from_dict({"type": "title", "text": "T"}) == TitleItem(text="T")
    assert content_item_from_dict({"type": "header", "text": "H", "level": 3}) == HeaderItem(text="H", level=3)
    assert content_item_from_dict({"type": "list", "items": ["a", 2]}) == ListItem(items=("a", "2"))
    assert content_item_from_dict({"type": "PARAGRAPH", "text": "P"}) == ParagraphItem(text="P")


def test_header_without_level_is_top_section():
    assert content_item_from_dict({"type": "header", "text": "H"}).level == 1


def test_unknown_type_is_rejected():
    with pytest.raises(ValueError):
        content_item_from_dict({"type": "table"})


def test_items_to_dicts():
    assert content_item_to_dict(TitleItem(text="T")) == {"type": "title", "text": "T", "level": 0}
    assert content_item_to_dict(ListItem(items=("a",))) == {"type": "list", "items": ["a"]}
    assert content_item_to_dict(ParagraphItem(text="P")) == {"type": "paragraph", "text": "P"}


def test_kinds_and_headings():
    assert HeaderItem(text="H", level=1).kind == ItemKind.HEADER
    assert is_heading(TitleItem(text="T"))
    assert is_heading(HeaderItem(text="H", level=2))
    assert not is_heading(ListItem())
    assert not is_heading(ParagraphItem(text="P"))


def test_items_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        ParagraphItem(text="P").text = "changed"
