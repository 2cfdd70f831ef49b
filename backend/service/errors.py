"""Ошибки сервиса Фибоначчи.

Каждая ошибка несёт HTTP-код, с которым роуты отдают её клиенту.
"""


class FibonacciError(RuntimeError):
    """Базовая ошибка сервиса последовательностей."""

    status_code = 500


class InvalidInputError(FibonacciError):
    """Некорректный числовой ввод или имя файла."""

    status_code = 400


class OutOfRangeError(FibonacciError):
    """Позиция вне поддерживаемого диапазона."""

    status_code = 400


class DivisionByZeroError(FibonacciError):
    """Отношение не определено: делитель f(n-1) равен нулю."""

    status_code = 400


class NotFoundError(FibonacciError):
    """Файл с последовательностью не найден."""

    status_code = 404


class StorageError(FibonacciError):
    """Ошибка ввода-вывода при записи или чтении файла."""

    status_code = 500
