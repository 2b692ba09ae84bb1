#!/usr/bin/env python3
"""
Flowchart Service - FastAPI сервис построения блок-схем из веб-страниц

Endpoints:
    GET  /                         - проверка состояния сервиса
    POST /api/crawl                - загрузить страницу и извлечь контент
    POST /api/extract              - простая схема (абзацы цепочкой)
    POST /api/extract-advanced     - схема с иерархией заголовков
    POST /api/extract-html         - схема из HTML (разбор по тегам)
    POST /api/validate-connection  - проверить новую связь на цикл
"""

import logging
from typing import Iterator, Optional, List, Literal

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from . import config
from .crawler import PageFetcher
from .errors import FlowchartError, classify_error
from .flow_builder import build_simple_flow
from .models import content_item_from_dict
from .pipeline import build_flowchart, build_flowchart_from_html
from .validation import creates_cycle

# Настройка логирования
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


class CrawlRequest(BaseModel):
    """Запрос на загрузку страницы"""
    url: Optional[str] = None


class ExtractRequest(BaseModel):
    """Запрос на простую схему"""
    content: Optional[str] = None
    title: Optional[str] = None


class StructuredItemModel(BaseModel):
    """Элемент контента из DOM"""
    type: Literal["title", "header", "list", "paragraph"]
    text: Optional[str] = None
    items: Optional[List[str]] = None
    level: Optional[int] = Field(default=None, ge=0)


class AdvancedExtractRequest(BaseModel):
    """Запрос на схему с иерархией"""
    model_config = ConfigDict(populate_by_name=True)

    content: Optional[str] = None
    title: Optional[str] = None
    original_url: Optional[str] = Field(default=None, alias="originalUrl")
    structured_content: Optional[List[StructuredItemModel]] = Field(
        default=None, alias="structuredContent"
    )


class HtmlExtractRequest(BaseModel):
    """Запрос на схему из HTML"""
    html: Optional[str] = None
    title: Optional[str] = None
    clean: bool = True


class EdgeRef(BaseModel):
    source: str
    target: str


class ConnectionCheckRequest(BaseModel):
    """Проверка новой связи"""
    edges: List[EdgeRef] = []
    source: str
    target: str


class ConnectionCheckResponse(BaseModel):
    cyclic: bool


class HealthResponse(BaseModel):
    status: str
    message: str


app = FastAPI(
    title="Page Flowchart Service",
    description="Builds hierarchical flowcharts from web page content",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_fetcher() -> Iterator[PageFetcher]:
    """Загрузчик на время запроса, сессия закрывается после ответа"""
    with PageFetcher() as fetcher:
        yield fetcher


@app.get("/", response_model=HealthResponse)
async def health():
    """Проверка состояния сервиса"""
    return HealthResponse(status="ok", message="Flowchart backend is running")


@app.post("/api/crawl")
def crawl(request: CrawlRequest, fetcher: PageFetcher = Depends(get_fetcher)):
    """
    Загрузить страницу и извлечь контент

    Returns:
        {url, title, content, structuredContent, stats}
    """
    if not request.url:
        raise HTTPException(status_code=400, detail="URL is required")

    logger.info(f"[CRAWL START] URL: {request.url}")
    try:
        result = fetcher.crawl(request.url)
    except FlowchartError as e:
        info = classify_error(e, "Content extraction")
        return JSONResponse(status_code=502, content={
            "error": "Error during page processing",
            "message": info.message,
            "details": info.to_dict(),
        })
    except Exception as e:
        logger.exception(f"[CRAWL END] Unexpected error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"[CRAWL SUCCESS] URL: {request.url}")
    return result.to_dict()


@app.post("/api/extract")
async def extract(request: ExtractRequest):
    """Простая схема: абзацы по порядку"""
    if not request.content:
        raise HTTPException(status_code=400, detail="Content is required")

    logger.info(f"Обработка контента: {request.title or 'Untitled'}")
    return build_simple_flow(request.content).to_dict()


@app.post("/api/extract-advanced")
async def extract_advanced(request: AdvancedExtractRequest):
    """Схема с иерархией: готовые элементы из DOM или разметка текста"""
    if not request.content and not request.structured_content:
        raise HTTPException(status_code=400, detail="Content or structuredContent is required")

    structured_items = [
        content_item_from_dict(item.model_dump())
        for item in (request.structured_content or [])
    ]
    source = "structuredContent" if structured_items else "text"
    logger.info(f"Расширенная обработка: {request.title or 'Untitled'} (источник: {source})")

    graph = build_flowchart(
        text=request.content or "",
        title=request.title or "",
        structured_items=structured_items,
    )
    return graph.to_dict()


@app.post("/api/extract-html")
async def extract_html(request: HtmlExtractRequest):
    """Схема из HTML"""
    if not request.html:
        raise HTTPException(status_code=400, detail="HTML is required")

    graph = build_flowchart_from_html(request.html, title=request.title or "", clean=request.clean)
    return graph.to_dict()


@app.post("/api/validate-connection", response_model=ConnectionCheckResponse)
async def validate_connection(request: ConnectionCheckRequest):
    """Проверить, образует ли новая связь цикл"""
    edges = [edge.model_dump() for edge in request.edges]
    return ConnectionCheckResponse(cyclic=creates_cycle(edges, request.source, request.target))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
