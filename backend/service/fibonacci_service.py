"""Вычисление чисел Фибоначчи для эндпоинтов ``/fibonacci``."""
from __future__ import annotations

import re
from typing import List, Optional, Union

from backend.service.errors import (
    DivisionByZeroError,
    InvalidInputError,
    OutOfRangeError,
)

# Позиция, начиная с которой findNumber/findRatio отвечают 400.
DEFAULT_MAX_POSITION = 8

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
# Совпадает с лимитом int-строк интерпретатора по умолчанию
_MAX_DIGITS = 4300


def parse_integer(value: Union[int, str], *, allow_negative: bool = True) -> int:
    """Приводит значение из query-строки к ``int``.

    Допускаются ``int`` и строки вида ``"12"``, ``" +12 "``. Дробные числа,
    ``bool`` и прочий мусор отклоняются с ``InvalidInputError``.
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"Некорректное число: {value!r}")

    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and _INTEGER_RE.fullmatch(value.strip()):
        text = value.strip()
        try:
            if len(text.lstrip("+-")) > _MAX_DIGITS:
                raise ValueError("too many digits")
            number = int(text)
        except ValueError as exc:
            raise InvalidInputError(
                f"Слишком длинное число ({len(text)} символов)"
            ) from exc
    else:
        raise InvalidInputError(
            f"Некорректное число: {value!r}. Укажите целое число"
        )

    if not allow_negative and number < 0:
        raise InvalidInputError(
            f"Число должно быть неотрицательным, получено {number}"
        )
    return number


def fibonacci_number(position: int, max_position: Optional[int] = DEFAULT_MAX_POSITION) -> int:
    """Возвращает число Фибоначчи на позиции ``position`` (f(0)=0, f(1)=1).

    Считаем итеративно, значения совпадают с рекурсивным определением.
    Отрицательные позиции и позиции ``>= max_position`` дают
    ``OutOfRangeError``; ``max_position=None`` снимает ограничение.
    """
    if position < 0:
        raise OutOfRangeError(
            f"Позиция {position} отрицательная. Укажите число от 0"
        )
    if max_position is not None and position >= max_position:
        raise OutOfRangeError(
            f"Позиция {position} слишком большая. Максимум: {max_position - 1}"
        )

    prev, curr = 0, 1
    for _ in range(position):
        prev, curr = curr, prev + curr
    return prev


def fibonacci_ratio(n: int, max_position: Optional[int] = DEFAULT_MAX_POSITION) -> float:
    """Приближение золотого сечения: f(n) / f(n-1)."""
    dividend = fibonacci_number(n, max_position)
    divisor = fibonacci_number(n - 1, max_position)
    if divisor == 0:
        raise DivisionByZeroError(
            f"Отношение для n={n} не определено: f({n - 1}) = 0"
        )
    return dividend / divisor


def fibonacci_sequence(count: Union[int, str]) -> List[int]:
    """Возвращает последовательность Фибоначчи от f(0) до f(count).

    Длина результата ``count + 1``: ``fibonacci_sequence(5)`` даёт
    ``[0, 1, 1, 2, 3, 5]``, для нуля результат ``[0]``. Строим список за
    один проход по двум текущим значениям, верхней границы у ``count`` нет.
    """
    count = parse_integer(count, allow_negative=False)

    sequence = [0]
    prev, curr = 0, 1
    for _ in range(count):
        sequence.append(curr)
        prev, curr = curr, prev + curr

    return sequence
