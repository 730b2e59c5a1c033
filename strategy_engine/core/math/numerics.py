"""
Numerics — десятичная арифметика и конверсия base units

Модуль обеспечивает точную десятичную арифметику для цен, бюджетов и rates:
- Decimal с фиксированным контекстом (100 значащих цифр), без binary float
- Явное округление при переходе к целым base units (ceil/floor/truncate)
- Каноническое строковое представление без экспоненты
- Усечение (не округление) дробной части для отображения

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. float никогда не попадает в вычисления (TypeError на входе)
2. NaN/Inf никогда не пропагируют (ValueError на входе)
3. Любая конверсия в int принимает явный Rounding, default отсутствует
4. Глобальный decimal-контекст не изменяется (только localcontext)
"""

import decimal
from decimal import (
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    Context,
    Decimal,
    InvalidOperation,
    localcontext,
)
from enum import Enum
from typing import Final, Union

# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ
# =============================================================================

# Количество значащих цифр для всех промежуточных вычислений
DECIMAL_PRECISION: Final[int] = 100

# Максимальное число decimals токена (uint8)
MAX_TOKEN_DECIMALS: Final[int] = 255

# Контекст для всех вычислений движка.
# Округление ROUND_HALF_DOWN применяется только к 101-й значащей цифре;
# округление на границе base units всегда задаётся явно через Rounding.
DECIMAL_CONTEXT: Final[Context] = Context(
    prec=DECIMAL_PRECISION,
    rounding=ROUND_HALF_DOWN,
    Emin=-999_999,
    Emax=999_999,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
)

DecimalLike = Union[str, int, Decimal]


# =============================================================================
# ТИПЫ
# =============================================================================


class Rounding(str, Enum):
    """Режим округления при переходе к целым значениям."""

    CEIL = ROUND_CEILING  # минимально необходимая сумма
    FLOOR = ROUND_FLOOR  # поставляемая сумма
    TRUNCATE = ROUND_DOWN  # отбрасывание дробной части (к нулю)


# =============================================================================
# ПАРСИНГ И ФОРМАТИРОВАНИЕ
# =============================================================================


def to_decimal(value: DecimalLike, name: str = "value") -> Decimal:
    """
    Преобразование входного значения в Decimal.

    Допустимые типы: str, int, Decimal. float запрещён, так как несёт
    ошибку двоичного представления ещё до попадания в движок.

    Args:
        value: Исходное значение (например, "1800.5")
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Конечное Decimal значение

    Raises:
        TypeError: Если тип не поддерживается (float, bool, None, ...)
        ValueError: Если строка не является десятичным числом или NaN/Inf

    Examples:
        >>> to_decimal("0.1")
        Decimal('0.1')
        >>> to_decimal(0.1)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        TypeError: ...
    """
    if isinstance(value, (bool, float)) or not isinstance(value, (str, int, Decimal)):
        raise TypeError(
            f"{name} must be str, int or Decimal, got {type(value).__name__}"
        )

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    else:
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"{name} is not a valid decimal number: {value!r}") from None

    if not result.is_finite():
        raise ValueError(f"{name} must be finite, got {value!r}")

    return result


def decimal_to_str(value: Decimal) -> str:
    """
    Каноническое строковое представление Decimal.

    Фиксированная точка, без экспоненты и без хвостовых нулей.
    Преобразование точное: контекст не участвует.

    Examples:
        >>> decimal_to_str(Decimal("2E+3"))
        '2000'
        >>> decimal_to_str(Decimal("0.500"))
        '0.5'
        >>> decimal_to_str(Decimal("-0.00"))
        '0'
    """
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def trim_decimal(value: DecimalLike, decimals: int) -> str:
    """
    Усечение дробной части до decimals знаков без округления вверх.

    Используется для отображения результатов распределения: показанное
    значение никогда не завышает точность.

    Args:
        value: Исходное значение
        decimals: Максимальное число знаков после точки

    Returns:
        Каноническая строка с не более чем decimals знаками после точки

    Examples:
        >>> trim_decimal("1999.8999999", 2)
        '1999.89'
        >>> trim_decimal("5", 6)
        '5'
    """
    validate_token_decimals(decimals, "decimals")
    text = decimal_to_str(to_decimal(value, "value"))

    integer_part, _, fraction = text.partition(".")
    fraction = fraction[:decimals]
    trimmed = f"{integer_part}.{fraction}" if fraction else integer_part

    return decimal_to_str(Decimal(trimmed))


# =============================================================================
# СТЕПЕНИ И ДЕЛЕНИЕ
# =============================================================================


def ten_pow(exp_a: int, exp_b: int) -> Decimal:
    """
    Точная степень десяти 10^(exp_a - exp_b).

    Используется для перевода между base-unit пространствами двух токенов
    с разными decimals.
    """
    return Decimal(1).scaleb(exp_a - exp_b)


def div_rounded(
    numerator: DecimalLike, denominator: DecimalLike, *, rounding: Rounding
) -> Decimal:
    """
    Целочисленное частное с явным направлением округления.

    В отличие от деления с последующим округлением, не теряет точность на
    последней значащей цифре: частное и остаток считаются точно.

    Args:
        numerator: Делимое
        denominator: Делитель (не ноль)
        rounding: CEIL, FLOOR или TRUNCATE

    Returns:
        Целое Decimal значение

    Raises:
        ZeroDivisionError: Если denominator равен нулю
    """
    num = to_decimal(numerator, "numerator")
    den = to_decimal(denominator, "denominator")
    if den.is_zero():
        raise ZeroDivisionError("denominator cannot be zero")

    with localcontext(DECIMAL_CONTEXT):
        quotient, remainder = divmod(num, den)
        # divmod усекает к нулю; знак остатка совпадает со знаком делимого
        if remainder.is_zero() or rounding == Rounding.TRUNCATE:
            return quotient

        exact_is_positive = (num > 0) == (den > 0)
        if rounding == Rounding.CEIL and exact_is_positive:
            return quotient + 1
        if rounding == Rounding.FLOOR and not exact_is_positive:
            return quotient - 1
        return quotient


# =============================================================================
# BASE UNITS
# =============================================================================


def validate_token_decimals(decimals: int, name: str = "decimals") -> None:
    """
    Проверка, что decimals токена — целое в [0, 255].

    Raises:
        TypeError: Если decimals не int
        ValueError: Если decimals вне диапазона
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise TypeError(f"{name} must be int, got {type(decimals).__name__}")

    if decimals < 0 or decimals > MAX_TOKEN_DECIMALS:
        raise ValueError(f"{name} must be in [0, {MAX_TOKEN_DECIMALS}], got {decimals}")


def to_base_units(amount: DecimalLike, decimals: int, *, rounding: Rounding) -> int:
    """
    Конверсия: человеческие единицы токена → целые base units.

    amount * 10^decimals, округление выбирает вызывающий:
    - CEIL при расчёте минимально необходимой суммы
    - FLOOR/TRUNCATE при расчёте поставляемой суммы

    Args:
        amount: Сумма в единицах токена (например, "0.5")
        decimals: decimals токена
        rounding: Направление округления (обязательное)

    Returns:
        Сумма в base units

    Examples:
        >>> to_base_units("0.5", 18, rounding=Rounding.FLOOR)
        500000000000000000
        >>> to_base_units("1.0000001", 6, rounding=Rounding.CEIL)
        1000001
    """
    validate_token_decimals(decimals, "decimals")
    value = to_decimal(amount, "amount")

    with localcontext(DECIMAL_CONTEXT):
        scaled = value.scaleb(decimals)
        return int(scaled.to_integral_value(rounding=Rounding(rounding).value))


def from_base_units(amount: DecimalLike, decimals: int) -> Decimal:
    """
    Конверсия: base units → человеческие единицы токена (точная).

    Examples:
        >>> from_base_units(1000000000, 6)
        Decimal('1000.000000')
    """
    validate_token_decimals(decimals, "decimals")
    value = to_decimal(amount, "amount")

    with localcontext(DECIMAL_CONTEXT):
        return value.scaleb(-decimals)
