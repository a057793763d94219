"""
Conflict Policies - Решения оператора при сверке.

- AutoOverwritePolicy: пакетный режим, всё решается автоматически
- PromptOperatorPolicy: интерактивный режим, вопросы оператору
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Sequence

from loguru import logger

from src.ledger.domain.exceptions import DuplicateDateConflict
from src.parsing.domain.exceptions import SalesReportError
from src.parsing.domain.models import ReportBlock


class BlockDecision(Enum):
    """Решение по блоку перед переносом."""
    TRANSFER = "transfer"
    SKIP = "skip"
    CANCEL = "cancel"


class ConflictPolicy(ABC):
    """Политика разрешения конфликтов сверки."""

    @abstractmethod
    def confirm_block(self, block: ReportBlock) -> BlockDecision:
        """Переносить ли блок (CANCEL прерывает весь прогон)."""
        pass

    @abstractmethod
    def on_duplicate(self, block: ReportBlock, conflict: DuplicateDateConflict) -> bool:
        """True - перезаписать, False - прервать прогон."""
        pass

    @abstractmethod
    def continue_after_error(self, block: ReportBlock, error: SalesReportError) -> bool:
        """True - продолжить со следующего блока, False - прервать прогон."""
        pass


class AutoOverwritePolicy(ConflictPolicy):
    """Пакетный режим: переносить всё, перезаписывать, продолжать после ошибок."""

    def confirm_block(self, block: ReportBlock) -> BlockDecision:
        return BlockDecision.TRANSFER

    def on_duplicate(self, block: ReportBlock, conflict: DuplicateDateConflict) -> bool:
        logger.warning(f"[AutoOverwritePolicy] Перезапись: {conflict.message}")
        return True

    def continue_after_error(self, block: ReportBlock, error: SalesReportError) -> bool:
        return True


Ask = Callable[[str, Sequence[str]], str]


def console_ask(message: str, choices: Sequence[str]) -> str:
    """Спрашивает в консоли, пока не получит один из вариантов."""
    prompt = f"{message} [{'/'.join(choices)}]: "
    normalized = {choice.lower(): choice for choice in choices}
    while True:
        answer = input(prompt).strip().lower()
        if answer in normalized:
            return normalized[answer]
        print(f"  Введите один из вариантов: {', '.join(choices)}")


def describe_block(block: ReportBlock) -> str:
    items = ", ".join(f"{key.label}: {amount:,}円" for key, amount in block.items.items())
    return f"{block.date.month}月{block.date.day}日 {block.store_label} ({items})"


class PromptOperatorPolicy(ConflictPolicy):
    """
    Интерактивный режим.

    Args:
        ask: Функция вопроса (message, choices) -> choice;
             по умолчанию консольный ввод
        confirm_each_block: Спрашивать подтверждение на каждый блок
    """

    TRANSFER, SKIP, CANCEL = "transfer", "skip", "cancel"
    YES, NO = "yes", "no"

    def __init__(self, ask: Ask = console_ask, confirm_each_block: bool = True):
        self.ask = ask
        self.confirm_each_block = confirm_each_block

    def confirm_block(self, block: ReportBlock) -> BlockDecision:
        if not self.confirm_each_block:
            return BlockDecision.TRANSFER
        answer = self.ask(
            f"Перенести {describe_block(block)}?",
            (self.TRANSFER, self.SKIP, self.CANCEL),
        )
        return BlockDecision(answer)

    def on_duplicate(self, block: ReportBlock, conflict: DuplicateDateConflict) -> bool:
        answer = self.ask(f"{conflict.message}. Перезаписать?", (self.YES, self.NO))
        return answer == self.YES

    def continue_after_error(self, block: ReportBlock, error: SalesReportError) -> bool:
        answer = self.ask(f"Ошибка: {error.message}. Продолжить?", (self.YES, self.NO))
        return answer == self.YES
