"""
Stage 3: Report Assembly

ЦКП: Блоки отчётов (магазин + дата + статьи), разделённые якорями.

Правила:
- Якорь закрывает открытый блок и открывает новый
- Строки до первого якоря игнорируются
- Строка магазина: первая строка с 店舗 (без учёта пробелов)
- Блок сохраняется только с магазином и датой; блок без статей
  отбрасывается и учитывается
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from src.parsing.domain.models import ReportBlock
from src.parsing.s1_classification import ClassificationResult, LineType
from src.parsing.s2_formatting import FieldFormatter
from .date_parser import DateParser
from .item_extractor import ItemExtractor

WHITESPACE = re.compile(r"\s+")
STORE_MARKER = "店舗"


@dataclass
class AssemblyResult:
    """Результат Stage 3."""
    blocks: List[ReportBlock] = field(default_factory=list)
    discarded_empty: int = 0
    discarded_unresolved: int = 0
    orphan_lines: int = 0

    @property
    def discarded(self) -> int:
        return self.discarded_empty + self.discarded_unresolved

    def to_dict(self) -> dict:
        return {
            "blocks": [block.to_dict() for block in self.blocks],
            "discarded_empty": self.discarded_empty,
            "discarded_unresolved": self.discarded_unresolved,
            "orphan_lines": self.orphan_lines,
        }


class AssemblyStage:
    """
    Stage 3: Сборка блоков отчётов.

    Держит не более одного открытого блока.
    """

    def __init__(
        self,
        formatter: Optional[FieldFormatter] = None,
        date_parser: Optional[DateParser] = None,
        item_extractor: Optional[ItemExtractor] = None,
    ):
        self.formatter = formatter or FieldFormatter()
        self.date_parser = date_parser or DateParser()
        self.item_extractor = item_extractor or ItemExtractor()

    def process(self, classification: ClassificationResult) -> AssemblyResult:
        result = AssemblyResult()
        current: Optional[ReportBlock] = None

        for line in classification.kept_lines:
            formatted = self.formatter.format(line.text)

            if line.line_type is LineType.ANCHOR:
                self._close(current, result)
                current = ReportBlock(date=self.date_parser.parse(line.text))
                current.lines.append(formatted)
                continue

            if current is None:
                result.orphan_lines += 1
                continue

            current.lines.append(formatted)

            if self.is_store_line(formatted):
                if not current.raw_store:
                    current.raw_store = line.text
                continue

            extracted = self.item_extractor.extract(formatted)
            if extracted:
                key, amount = extracted
                current.add_item(key, amount)

        self._close(current, result)

        logger.info(
            f"[Stage 3: Assembly] Блоков: {len(result.blocks)}, "
            f"пустых: {result.discarded_empty}, "
            f"без магазина/даты: {result.discarded_unresolved}"
        )
        if result.orphan_lines:
            logger.debug(f"[Stage 3: Assembly] Строк до первого якоря: {result.orphan_lines}")
        return result

    @staticmethod
    def is_store_line(line: str) -> bool:
        return STORE_MARKER in WHITESPACE.sub("", line)

    @staticmethod
    def _close(block: Optional[ReportBlock], result: AssemblyResult) -> None:
        if block is None:
            return

        if not block.has_store or block.date is None:
            result.discarded_unresolved += 1
            logger.debug(
                f"[Stage 3: Assembly] Блок без магазина или даты: "
                f"store='{block.raw_store}', date={block.date}"
            )
            return

        if not block.items:
            result.discarded_empty += 1
            logger.debug(f"[Stage 3: Assembly] Пустой блок отброшен: {block.raw_store} {block.date}")
            return

        result.blocks.append(block)
