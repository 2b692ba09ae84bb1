"""
Ошибки и их классификация

Ядро (разметка, приоритизация, построение схемы) не бросает исключений
на "плохой" контент. Ошибки возникают только у внешних участников:
загрузка страницы, разбор HTML, импорт JSON.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Any, Optional

import requests

logger = logging.getLogger(__name__)


class FlowchartError(Exception):
    """Базовая ошибка"""


class FetchError(FlowchartError):
    """Не удалось загрузить страницу"""


class FetchTimeoutError(FetchError):
    """Таймаут загрузки"""


class NetworkError(FetchError):
    """Сетевая ошибка (DNS, соединение)"""


class NavigationError(FetchError):
    """Сервер вернул ошибочный статус"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ExtractionError(FlowchartError):
    """Не удалось извлечь контент со страницы"""


class FlowchartFormatError(FlowchartError):
    """Неверный формат JSON блок-схемы"""


@dataclass
class ErrorInfo:
    """Описание ошибки для ответа API"""
    type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "message": self.message, "details": self.details}


# Порядок важен: подклассы раньше базовых классов
ERROR_TYPES = [
    (FetchTimeoutError, "TIMEOUT_ERROR"),
    (requests.Timeout, "TIMEOUT_ERROR"),
    (NavigationError, "NAVIGATION_ERROR"),
    (requests.HTTPError, "NAVIGATION_ERROR"),
    (NetworkError, "NETWORK_ERROR"),
    (requests.ConnectionError, "NETWORK_ERROR"),
    (ExtractionError, "EXTRACTOR_ERROR"),
    (FlowchartFormatError, "FORMAT_ERROR"),
]


def classify_error(error: BaseException, context: str) -> ErrorInfo:
    """
    Определить тип ошибки и залогировать её

    Args:
        error: исключение
        context: где произошла ошибка (для лога и ответа)

    Returns:
        ErrorInfo с типом TIMEOUT_ERROR / NAVIGATION_ERROR / NETWORK_ERROR /
        EXTRACTOR_ERROR / FORMAT_ERROR / UNKNOWN_ERROR
    """
    error_type = "UNKNOWN_ERROR"
    for error_class, name in ERROR_TYPES:
        if isinstance(error, error_class):
            error_type = name
            break

    message = str(error) or error.__class__.__name__
    logger.error(f"[{error_type}] {context}: {message}")

    details: Dict[str, Any] = {"context": context}
    status_code = getattr(error, "status_code", None)
    if status_code is not None:
        details["status_code"] = status_code

    return ErrorInfo(type=error_type, message=message, details=details)
