"""
Block Orderer - Порядок блоков отчётов.

ЦКП: Блоки по дате (старые раньше), при равной дате - по рангу
магазина в реестре. Сортировка стабильная.
"""

import sys
from typing import List

from config.settings import FAR_FUTURE_DATE
from src.parsing.domain.models import ReportBlock

UNRANKED = sys.maxsize


class BlockOrderer:
    """Стабильная сортировка блоков по (дата, ранг)."""

    @staticmethod
    def sort_key(block: ReportBlock):
        return (
            block.date or FAR_FUTURE_DATE,
            UNRANKED if block.store_rank is None else block.store_rank,
        )

    def order(self, blocks: List[ReportBlock]) -> List[ReportBlock]:
        return sorted(blocks, key=self.sort_key)
