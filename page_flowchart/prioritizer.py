"""
Приоритизация элементов перед построением схемы

Ограничивает число элементов, чтобы схема оставалась читаемой.
Заголовки не отбрасываются никогда; при усечении они идут первыми,
затем остальные элементы в исходном порядке.
"""

import logging
from typing import List, Sequence

from .models import ContentItem, is_heading

logger = logging.getLogger(__name__)


# Максимум узлов в схеме
MAX_FLOW_ITEMS = 15


def prioritize_items(items: Sequence[ContentItem], limit: int = MAX_FLOW_ITEMS) -> List[ContentItem]:
    """
    Ограничить число элементов с приоритетом заголовков

    Args:
        items: элементы в порядке документа
        limit: ограничение N

    Returns:
        Без изменений, если элементов не больше limit.
        Иначе: все заголовки (в исходном порядке) + первые
        max(0, limit - заголовков) прочих элементов.
    """
    headings = [item for item in items if is_heading(item)]
    others = [item for item in items if not is_heading(item)]

    if len(headings) + len(others) <= limit:
        return list(items)

    available = max(0, limit - len(headings))
    logger.info(
        f"Усечение: {len(items)} -> заголовков {len(headings)}, "
        f"прочих {min(available, len(others))} из {len(others)}"
    )
    return headings + others[:available]
