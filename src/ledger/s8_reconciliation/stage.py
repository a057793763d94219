"""
Stage 8: Reconciliation

ЦКП: Суммы блоков записаны в книгу учёта; повторные отправки
обнаружены до записи.

Для каждого блока (в итоговом порядке):
0. Подтверждение блока политикой (перенести / пропустить / прервать)
1. Лист периода, строки магазина, колонка даты (ошибка - блок пропущен)
2. Дубликат даты: в целевой колонке уже есть проверяемые статьи
3. Совпадение с предыдущим днём: аномалия, прогон прерывается
4. Запись статей по меткам строк книги учёта

Записанные блоки не откатываются при последующем прерывании.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from config.settings import FIRST_DATE_COLUMN
from contracts.report_dto import CellWriteDTO, TransferResultDTO
from src.ledger.domain.exceptions import (
    DuplicateDateConflict,
    LedgerLookupError,
    LedgerWriteError,
    PreviousDayIdenticalAnomaly,
    TransferAborted,
)
from src.ledger.domain.interfaces import ILedgerBook, ILedgerSheet
from src.ledger.s7_locator import LedgerLocator
from src.parsing.domain.exceptions import SalesReportError, StoreNotFoundError
from src.parsing.domain.models import ReportBlock
from src.parsing.rules.rule_models import ItemRules
from .policies import AutoOverwritePolicy, BlockDecision, ConflictPolicy


def to_amount(value: Any) -> Optional[int]:
    """
    Сумма из значения ячейки.

    None / пустая строка / нечисловой текст -> None.
    "123,456円" -> 123456.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    text = str(value).replace(",", "").replace("円", "").strip()
    if not text:
        return None
    try:
        return int(float(text))
    except ValueError:
        return None


def has_data(value: Any) -> bool:
    """Есть ли в ячейке данные (ноль и пусто - нет, текст - да)."""
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, str) and not value.strip():
        return False
    amount = to_amount(value)
    return amount is None or amount != 0


@dataclass
class CellWrite:
    """Одна записанная ячейка."""
    sheet: str
    row: int
    column: int
    store: str
    item_label: str
    amount: int
    previous_value: Any = None

    def to_dto(self) -> CellWriteDTO:
        return CellWriteDTO(
            sheet=self.sheet,
            row=self.row,
            column=self.column,
            store=self.store,
            item_label=self.item_label,
            amount=self.amount,
        )


@dataclass
class TransferResult:
    """Итог прогона переноса."""
    processed: int = 0
    errors: int = 0
    skipped: int = 0
    discarded: int = 0
    aborted: bool = False
    abort_reason: Optional[str] = None
    writes: List[CellWrite] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.aborted and self.errors == 0

    def abort(self, reason: str) -> None:
        self.aborted = True
        self.abort_reason = reason

    def to_dto(self) -> TransferResultDTO:
        return TransferResultDTO(
            processed=self.processed,
            errors=self.errors,
            skipped=self.skipped,
            discarded=self.discarded,
            aborted=self.aborted,
            abort_reason=self.abort_reason,
            writes=[write.to_dto() for write in self.writes],
            failures=list(self.failures),
        )

    def to_dict(self) -> dict:
        return self.to_dto().model_dump()


class ReconciliationEngine:
    """
    Stage 8: Сверка и запись блоков в книгу учёта.

    Один движок для пакетного и интерактивного режимов: различия
    только в ConflictPolicy.
    """

    def __init__(
        self,
        locator: LedgerLocator,
        item_rules: ItemRules,
        policy: Optional[ConflictPolicy] = None,
    ):
        self.locator = locator
        self.item_rules = item_rules
        self.policy = policy or AutoOverwritePolicy()

    def transfer(
        self,
        blocks: List[ReportBlock],
        book: ILedgerBook,
        discarded: int = 0,
    ) -> TransferResult:
        """
        Переносит блоки в книгу учёта и сохраняет её.

        Args:
            blocks: Упорядоченные валидные блоки
            book: Книга учёта
            discarded: Число отброшенных на разборе блоков (для итога)

        Returns:
            TransferResult
        """
        result = TransferResult(discarded=discarded)
        self.locator.invalidate()
        # Ячейки блока, упавшего на записи, могли быть записаны частично
        partially_written = False

        try:
            for number, block in enumerate(blocks, 1):
                label = f"{block.store_label} {block.date}"

                decision = self.policy.confirm_block(block)
                if decision is BlockDecision.CANCEL:
                    result.abort(f"Перенос отменён оператором на блоке {label}")
                    break
                if decision is BlockDecision.SKIP:
                    result.skipped += 1
                    logger.info(f"[Reconciliation] [{number}/{len(blocks)}] Пропущен: {label}")
                    continue

                try:
                    writes = self.transfer_block(block, book)
                except (LedgerLookupError, LedgerWriteError, StoreNotFoundError) as e:
                    partially_written = partially_written or isinstance(e, LedgerWriteError)
                    result.errors += 1
                    result.failures.append(e.message)
                    logger.error(f"[Reconciliation] [{number}/{len(blocks)}] {e.message}")
                    if not self.policy.continue_after_error(block, e):
                        result.abort(f"Прервано после ошибки: {e.message}")
                        break
                    continue
                except PreviousDayIdenticalAnomaly as e:
                    result.errors += 1
                    result.failures.append(e.message)
                    result.abort(e.message)
                    logger.error(f"[Reconciliation] Аномалия, перенос прерван: {e.message}")
                    break
                except TransferAborted as e:
                    result.abort(e.reason)
                    logger.warning(f"[Reconciliation] {e.reason}")
                    break

                result.processed += 1
                result.writes.extend(writes)
                logger.info(
                    f"[Reconciliation] [{number}/{len(blocks)}] Перенесён: {label} "
                    f"({len(writes)} ячеек)"
                )
        finally:
            if result.writes or partially_written:
                book.save()

        logger.info(
            f"[Reconciliation] Готово: перенесено {result.processed}, ошибок {result.errors}, "
            f"пропущено {result.skipped}, отброшено {result.discarded}"
            + (f", ПРЕРВАНО: {result.abort_reason}" if result.aborted else "")
        )
        return result

    def transfer_block(self, block: ReportBlock, book: ILedgerBook) -> List[CellWrite]:
        """
        Переносит один блок.

        Raises:
            LedgerLookupError / StoreNotFoundError: ячейка не найдена
            LedgerWriteError: ячейка не принимает запись
            PreviousDayIdenticalAnomaly: повтор сумм предыдущего дня
            TransferAborted: оператор отказался перезаписывать
        """
        sheet = self.locator.open_period(book, block.date)
        store, rows = self.locator.find_store_rows(sheet, block.raw_store, block.canonical_store)
        column = self.locator.find_date_column(sheet, block.date)

        self.check_duplicate(block, sheet, store, rows, column)
        self.check_previous_day(block, sheet, store, rows, column)
        return self.commit(block, sheet, store, rows, column)

    def check_duplicate(
        self,
        block: ReportBlock,
        sheet: ILedgerSheet,
        store: str,
        rows: Dict[str, int],
        column: int,
    ) -> None:
        existing = {}
        for label in self.item_rules.checked:
            row = rows.get(self.item_rules.ledger_label(label))
            if row is None:
                continue
            value = sheet.get_value(row, column)
            if has_data(value):
                existing[label] = value

        if not existing:
            return

        conflict = DuplicateDateConflict(store, block.date, existing, component="Reconciliation")
        if not self.policy.on_duplicate(block, conflict):
            raise TransferAborted(
                f"Оператор отказался перезаписывать {store} {block.date}",
                component="Reconciliation",
            )

    def check_previous_day(
        self,
        block: ReportBlock,
        sheet: ILedgerSheet,
        store: str,
        rows: Dict[str, int],
        column: int,
    ) -> None:
        previous_column = column - 1
        if previous_column < FIRST_DATE_COLUMN:
            return
        previous_date = self.locator.date_of_column(sheet, previous_column)
        if previous_date is None:
            return

        block_amounts = {key.label: amount for key, amount in block.items.items()}
        compared: List[Tuple[str, int]] = []

        for label in self.item_rules.checked:
            amount = block_amounts.get(label)
            row = rows.get(self.item_rules.ledger_label(label))
            if amount is None or row is None:
                continue

            previous = to_amount(sheet.get_value(row, previous_column))
            # Пустой предыдущий день - не аномалия
            if not previous or previous != amount:
                return
            compared.append((label, amount))

        if compared:
            raise PreviousDayIdenticalAnomaly(
                store, block.date, previous_date, compared, component="Reconciliation"
            )

    def commit(
        self,
        block: ReportBlock,
        sheet: ILedgerSheet,
        store: str,
        rows: Dict[str, int],
        column: int,
    ) -> List[CellWrite]:
        writes = []
        for key, amount in block.items.items():
            item_label = self.item_rules.ledger_label(key.label)
            row = rows.get(item_label)
            if row is None:
                logger.warning(
                    f"[Reconciliation] Нет строки '{item_label}' для {store} "
                    f"на листе {sheet.name}: статья пропущена"
                )
                continue

            previous_value = sheet.get_value(row, column)
            sheet.set_value(row, column, amount)
            writes.append(CellWrite(
                sheet=sheet.name,
                row=row,
                column=column,
                store=store,
                item_label=item_label,
                amount=amount,
                previous_value=previous_value,
            ))
        return writes
