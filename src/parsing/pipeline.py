"""
Parsing Pipeline - Оркестратор этапов 1-6.

Координирует выполнение этапов в строгом порядке:
1. Classification → 2. Formatting → 3. Assembly →
4. Line Ordering → 5. Store → 6. Block Ordering

Форматирование (этап 2) выполняется внутри сборки: каждая
сохраняемая строка форматируется до записи в блок.
"""

import re
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional

from loguru import logger

from contracts.report_dto import ReportBlockDTO
from src.parsing.domain.exceptions import NoInputDataError
from src.parsing.domain.interfaces import IReportParser
from src.parsing.domain.models import ReportBlock
from src.parsing.rules import ConfigLoader, ReportConfig
from src.parsing.s1_classification import ClassificationStage, ClassificationResult, LineClassifier
from src.parsing.s2_formatting import FieldFormatter
from src.parsing.s3_assembly import AssemblyStage, AssemblyResult, DateParser
from src.parsing.s4_line_ordering import LineOrderer
from src.parsing.s5_store import StoreResolver, StoreStage, StoreResult
from src.parsing.s6_block_ordering import BlockOrderer


@dataclass
class ParseResult:
    """
    Полный результат разбора со всеми промежуточными данными.

    blocks - валидные блоки в итоговом порядке.
    """
    blocks: List[ReportBlock] = field(default_factory=list)
    classification: Optional[ClassificationResult] = None
    assembly: Optional[AssemblyResult] = None
    store: Optional[StoreResult] = None
    processing_time_ms: float = 0.0

    @property
    def discarded(self) -> int:
        return self.assembly.discarded if self.assembly else 0

    @property
    def unparseable(self) -> int:
        return self.classification.unparseable_count if self.classification else 0

    def review_text(self) -> str:
        """Текст для проверки: блоки через пустую строку."""
        return "\n\n".join(
            "\n".join(block.ordered_lines or block.lines) for block in self.blocks
        )

    def block_dtos(self) -> List[ReportBlockDTO]:
        """Блоки в виде контракта Parsing -> Ledger."""
        return [
            ReportBlockDTO(
                raw_store=block.raw_store,
                canonical_store=block.canonical_store,
                store_rank=block.store_rank,
                date=block.date,
                items={key.label: amount for key, amount in block.items.items()},
                lines=block.ordered_lines or block.lines,
            )
            for block in self.blocks
        ]

    def to_dict(self) -> dict:
        return {
            "blocks": [block.to_dict() for block in self.blocks],
            "classification": self.classification.to_dict() if self.classification else None,
            "assembly": self.assembly.to_dict() if self.assembly else None,
            "store": self.store.to_dict() if self.store else None,
            "discarded": self.discarded,
            "unparseable": self.unparseable,
            "processing_time_ms": self.processing_time_ms,
        }


class ReportPipeline(IReportParser):
    """
    Пайплайн разбора отчётов.

    ЦКП: Упорядоченные валидные блоки + текст для проверки.
    """

    def __init__(
        self,
        config: Optional[ReportConfig] = None,
        config_loader: Optional[ConfigLoader] = None,
        today: Callable[[], date] = date.today,
        store_resolver: Optional[StoreResolver] = None,
    ):
        """
        Args:
            config: Готовая конфигурация (по умолчанию - из config_loader)
            config_loader: Загрузчик таблиц правил
            today: Источник текущей даты для дат без года
            store_resolver: Резолвер магазинов
        """
        self.config = config or (config_loader or ConfigLoader()).load()

        classifier = LineClassifier(self.config.classification)
        timestamp = re.compile(self.config.classification.anchor_patterns[0])

        self.classification_stage = ClassificationStage(self.config.classification, classifier)
        self.assembly_stage = AssemblyStage(
            formatter=FieldFormatter(),
            date_parser=DateParser(today=today),
        )
        self.line_orderer = LineOrderer(self.config.ordering, timestamp_pattern=timestamp)
        self.store_resolver = store_resolver or StoreResolver(self.config.stores)
        self.store_stage = StoreStage(self.store_resolver)
        self.block_orderer = BlockOrderer()

        logger.debug("[ReportPipeline] Инициализирован (6 этапов)")

    def parse(self, text: str) -> ParseResult:
        """
        Разбирает текст отчётов через этапы 1-6.

        Raises:
            NoInputDataError: пустой вход
        """
        if not text or not text.strip():
            raise NoInputDataError(component="ReportPipeline")

        start_time = time.time()

        logger.debug("[ReportPipeline] Stage 1-2/6: Classification + Formatting")
        classification = self.classification_stage.process(text)

        logger.debug("[ReportPipeline] Stage 3/6: Assembly")
        assembly = self.assembly_stage.process(classification)

        logger.debug("[ReportPipeline] Stage 4/6: Line Ordering")
        for block in assembly.blocks:
            block.ordered_lines = self.line_orderer.order(block.lines)

        logger.debug("[ReportPipeline] Stage 5/6: Store")
        store = self.store_stage.process(assembly.blocks)

        logger.debug("[ReportPipeline] Stage 6/6: Block Ordering")
        blocks = self.block_orderer.order(assembly.blocks)

        result = ParseResult(
            blocks=blocks,
            classification=classification,
            assembly=assembly,
            store=store,
            processing_time_ms=(time.time() - start_time) * 1000,
        )
        logger.info(
            f"[ReportPipeline] Готово: {len(blocks)} блоков, "
            f"отброшено: {result.discarded}, непарсимых строк: {result.unparseable}"
        )
        return result
