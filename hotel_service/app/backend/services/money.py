from decimal import Decimal, InvalidOperation

from .exceptions import ValidationError

CENT = Decimal("0.01")
# межа Numeric(10, 2)
MAX_AMOUNT = Decimal("99999999.99")


def to_money(value, what: str, allow_zero: bool = False) -> Decimal:
    """Грошове значення в копійках: без округлення, у межах колонки Numeric(10, 2)."""
    if value is None:
        raise ValidationError(f"{what} is required")
    try:
        amount = Decimal(str(value))
        if not amount.is_finite():
            raise ValidationError(f"{what} must be a number")
        if abs(amount) > MAX_AMOUNT:
            raise ValidationError(f"{what} cannot exceed {MAX_AMOUNT}")
        cents = amount.quantize(CENT)
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{what} must be a number") from exc

    if cents != amount:
        raise ValidationError(f"{what} cannot have more than two decimal places")
    if allow_zero and cents < 0:
        raise ValidationError(f"{what} cannot be negative")
    if not allow_zero and cents <= 0:
        raise ValidationError(f"{what} must be greater than zero")
    return cents
