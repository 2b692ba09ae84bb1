from page_flowchart.models import TitleItem, HeaderItem, ListItem, ParagraphItem
from page_flowchart.prioritizer import prioritize_items, MAX_FLOW_ITEMS


def _paragraphs(count, prefix="Paragraph"):
    return [ParagraphItem(text=f"{prefix} {i}") for i in range(count)]


def test_small_input_is_unchanged():
    items = [
        TitleItem(text="T"),
        ParagraphItem(text="p0"),
        HeaderItem(text="h", level=1),
        ListItem(items=("a",)),
    ]
    assert prioritize_items(items) == items


def test_exactly_limit_keeps_document_order():
    items = _paragraphs(7) + [HeaderItem(text="h", level=1)] + _paragraphs(7, "Other")
    assert len(items) == MAX_FLOW_ITEMS
    assert prioritize_items(items) == items


def test_truncation_puts_headers_first():
    h1 = HeaderItem(text="Section", level=1)
    h2 = HeaderItem(text="Subsection", level=2)
    paragraphs = _paragraphs(20)
    items = [h1, paragraphs[0], h2] + paragraphs[1:]

    result = prioritize_items(items)

    assert len(result) == MAX_FLOW_ITEMS
    assert result[:2] == [h1, h2]
    assert result[2:] == paragraphs[:13]


def test_headers_are_never_dropped():
    headers = [HeaderItem(text=f"H{i}", level=1 + i % 3) for i in range(17)]
    items = _paragraphs(3) + headers

    result = prioritize_items(items)

    assert result == headers


def test_custom_limit():
    items = [TitleItem(text="T")] + _paragraphs(5)
    assert prioritize_items(items, limit=3) == items[:3]


def test_empty_input():
    assert prioritize_items([]) == []
