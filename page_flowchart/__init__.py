# Page Flowchart
# Построение блок-схем из контента веб-страниц

__version__ = "1.0.0"

from .models import (
    ItemKind,
    VisualKind,
    EdgeLabel,
    TitleItem,
    HeaderItem,
    ListItem,
    ParagraphItem,
    ContentItem,
    GraphNode,
    GraphEdge,
    FlowGraph,
    content_item_from_dict,
    content_item_to_dict,
)

from .text_structurer import (
    structure_text,
    split_paragraphs,
    HEADER_RULES,
    LIST_RULES,
)

from .dom_extractor import (
    ExtractedPage,
    extract_page,
    extract_structured_items,
)

from .prioritizer import prioritize_items

from .flow_builder import (
    build_flow,
    build_simple_flow,
)

from .pipeline import (
    ItemSource,
    TextPatternSource,
    StructuredItemsSource,
    HtmlDocumentSource,
    build_flowchart,
    build_flowchart_from_html,
)

from .errors import (
    FlowchartError,
    FetchError,
    ExtractionError,
    FlowchartFormatError,
    classify_error,
)
