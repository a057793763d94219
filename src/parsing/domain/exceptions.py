"""
Исключения для домена Parsing.

Корень иерархии ошибок проекта и ошибки разбора отчётов.
Непарсимые строки и пустые блоки не являются исключениями:
они только учитываются в статистике разбора.
"""


class SalesReportError(Exception):
    """Базовое исключение проекта."""

    def __init__(self, message: str, component: str = None, original_error: Exception = None):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Sales Report Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class ReportConfigurationError(SalesReportError):
    """Ошибка загрузки или валидации таблиц правил."""
    pass


class NoInputDataError(SalesReportError):
    """Пустой входной текст: обработка не начинается."""

    def __init__(self, message: str = "Входной текст пуст", component: str = None):
        super().__init__(message, component=component)


class StoreNotFoundError(SalesReportError):
    """Не удалось сопоставить строку магазина с идентификатором."""

    def __init__(self, raw_store: str, component: str = None, candidates: list = None):
        self.raw_store = raw_store
        self.candidates = list(candidates or [])
        message = f"Магазин не найден: '{raw_store}'"
        if len(self.candidates) > 1:
            message += f" (неоднозначно: {', '.join(self.candidates)})"
        super().__init__(message, component=component)
