"""
Page Fetcher - загрузка страницы и извлечение контента

Загружает HTML по URL, выделяет основной контент, удаляет шум
и извлекает структурированные элементы для построения схемы.

Использование:
    fetcher = PageFetcher(timeout=60)
    result = fetcher.crawl("https://example.com/article")
    graph = build_flowchart(result.content, result.title, result.structured_content)
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

import requests

from . import config
from .models import ContentItem, content_item_to_dict
from .dom_extractor import extract_page
from .errors import FetchTimeoutError, NetworkError, NavigationError, ExtractionError

logger = logging.getLogger(__name__)


@dataclass
class CrawlResult:
    """Результат загрузки страницы"""
    url: str
    title: str
    content: str
    structured_content: List[ContentItem] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "content": self.content,
            "structuredContent": [content_item_to_dict(item) for item in self.structured_content],
            "stats": dict(self.stats),
        }


class PageFetcher:
    """HTTP клиент для загрузки страниц"""

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            timeout: таймаут запроса в секундах
            user_agent: заголовок User-Agent
            session: requests.Session (для переиспользования соединений)
        """
        self.timeout = timeout if timeout is not None else config.FETCH_TIMEOUT
        self.user_agent = user_agent or config.FETCH_USER_AGENT
        # Переданную сессию закрывает тот, кто её создал
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self):
        """Закрыть собственную сессию (освободить пул соединений)"""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def fetch_html(self, url: str) -> str:
        """
        Загрузить HTML

        Raises:
            FetchTimeoutError, NetworkError, NavigationError
        """
        logger.info(f"[FETCH] {url}")
        try:
            response = self.session.get(
                url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.Timeout as e:
            raise FetchTimeoutError(f"Timeout after {self.timeout}s: {url}") from e
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise NavigationError(f"HTTP {status} for {url}", status_code=status) from e
        except requests.RequestException as e:
            raise NetworkError(f"Request failed for {url}: {e}") from e

        if not response.encoding or response.encoding.lower() == "iso-8859-1":
            response.encoding = response.apparent_encoding
        return response.text

    def crawl(self, url: str) -> CrawlResult:
        """
        Загрузить страницу и извлечь контент

        Raises:
            FetchError: загрузка не удалась
            ExtractionError: на странице нет читаемого контента
        """
        html = self.fetch_html(url)
        page = extract_page(html, clean=True)

        if not page.clean_text and not page.items:
            raise ExtractionError(f"No readable content extracted from {url}")

        stats = {
            "html_length": len(html),
            "text_length": len(page.clean_text),
            "structured_items": len(page.items),
        }
        logger.info(f"[FETCH] {url}: заголовок={page.title!r}, статистика={stats}")

        return CrawlResult(
            url=url,
            title=page.title,
            content=page.clean_text,
            structured_content=page.items,
            stats=stats,
        )


def fetch_page(url: str, timeout: Optional[float] = None) -> CrawlResult:
    """Загрузить страницу с настройками по умолчанию"""
    with PageFetcher(timeout=timeout) as fetcher:
        return fetcher.crawl(url)
