from page_flowchart.models import TitleItem, HeaderItem, ListItem, ParagraphItem
from page_flowchart.text_structurer import (
    structure_text,
    split_paragraphs,
    match_header,
    match_list_entry,
    MAX_ITEMS,
)

LONG_LINE = "This paragraph is comfortably longer than twenty characters."


def test_empty_text_and_title():
    assert structure_text("", "") == []


def test_title_is_first_item():
    items = structure_text(LONG_LINE, "Page title")
    assert items[0] == TitleItem(text="Page title")
    assert items[0].level == 0
    assert items[1] == ParagraphItem(text=LONG_LINE)


def test_title_only():
    assert structure_text("", "Only title") == [TitleItem(text="Only title")]


def test_cn_chapter_header_level_1():
    assert match_header("第一章：概述") == HeaderItem(text="概述", level=1)
    assert match_header("第3节 安装步骤") == HeaderItem(text="安装步骤", level=1)


def test_cn_numeral_header_level_2():
    assert match_header("二、目标") == HeaderItem(text="目标", level=2)


def test_arabic_header_level_2():
    assert match_header("1. Introduction") == HeaderItem(text="Introduction", level=2)
    assert match_header("2 Goals and scope") == HeaderItem(text="Goals and scope", level=2)


def test_latin_letter_header_is_case_insensitive():
    assert match_header("B. Appendix") == HeaderItem(text="Appendix", level=2)
    # "a." claimed by the header rule before the lettered list rule
    assert match_header("b. appendix") == HeaderItem(text="appendix", level=2)


def test_chapter_rule_wins_over_later_rules():
    header = match_header("第十二章 总结")
    assert header == HeaderItem(text="总结", level=1)


def test_plain_sentence_is_not_header():
    assert match_header(LONG_LINE) is None


def test_list_entry_patterns():
    assert match_list_entry("• first") == "first"
    assert match_list_entry("- second") == "second"
    assert match_list_entry("※ note") == "note"
    assert match_list_entry("(1) numbered") == "numbered"
    assert match_list_entry("2) numbered too") == "numbered too"
    assert match_list_entry("a) lettered") == "lettered"
    assert match_list_entry("no marker here") is None


def test_bullets_collapse_into_one_list():
    text = "• first item\n- second item\n* third item"
    assert structure_text(text) == [ListItem(items=("first item", "second item", "third item"))]


def test_numbered_and_lettered_lists():
    assert structure_text("(1) first\n2) second") == [ListItem(items=("first", "second"))]
    assert structure_text("a) apple\nb) banana") == [ListItem(items=("apple", "banana"))]


def test_list_flushed_before_header():
    items = structure_text("- one\n- two\n1. Next section")
    assert items == [
        ListItem(items=("one", "two")),
        HeaderItem(text="Next section", level=2),
    ]


def test_list_flushed_before_paragraph():
    items = structure_text(f"- one\n{LONG_LINE}\n- two")
    assert items == [
        ListItem(items=("one",)),
        ParagraphItem(text=LONG_LINE),
        ListItem(items=("two",)),
    ]


def test_short_noise_line_does_not_break_list():
    items = structure_text("- one\nshort\n- two")
    assert items == [ListItem(items=("one", "two"))]


def test_paragraph_length_threshold():
    assert structure_text("x" * 20) == []
    assert structure_text("x" * 21) == [ParagraphItem(text="x" * 21)]


def test_blank_lines_and_whitespace_are_ignored():
    text = f"\n\n   \r\n  {LONG_LINE}  \r\n\n"
    assert structure_text(text) == [ParagraphItem(text=LONG_LINE)]


def test_result_truncated_to_max_items():
    text = "\n".join(f"Paragraph number {i} has enough text" for i in range(20))
    items = structure_text(text, "Title")
    assert len(items) == MAX_ITEMS
    assert items[0] == TitleItem(text="Title")
    assert items[-1] == ParagraphItem(text="Paragraph number 13 has enough text")


def test_split_paragraphs():
    text = f"short\n{LONG_LINE}\n\n{LONG_LINE} again"
    assert split_paragraphs(text) == [LONG_LINE, f"{LONG_LINE} again"]
    assert split_paragraphs(text, limit=1) == [LONG_LINE]
    assert split_paragraphs(text, min_length=100) == []


def test_fullwidth_digits_are_not_header_markers():
    line = "２０２３ 年度报告总结如下所述的内容很长很长"
    assert match_header(line) is None
    assert match_list_entry("（１） 条目") is None
    assert structure_text(line) == [ParagraphItem(text=line)]


def test_non_ascii_letters_are_not_latin_markers():
    # Знак Кельвина и "длинная s" не совпадают с [A-Za-z]
    assert match_header("\u212a. Kelvin section") is None
    assert match_header("ſ. long s section") is None
    assert match_list_entry("ı) dotless i") is None


def test_chapter_marker_accepts_ascii_digits_and_fullwidth_space():
    assert match_header("第12章　结论") == HeaderItem(text="结论", level=1)
    assert match_header("第１２章 结论") is None
