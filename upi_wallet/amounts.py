"""Amount normalization helpers."""

from decimal import ROUND_DOWN, Decimal, Inexact, InvalidOperation, Rounded, localcontext

from upi_wallet.models.exceptions import InvalidAmountError

CENT = Decimal("0.01")


def to_amount(value) -> Decimal:
    """
    Convert a caller-supplied value to a two-decimal Decimal amount.

    Args:
        value: A Decimal, int, float or numeric string

    Returns:
        The amount quantized to cents

    Raises:
        InvalidAmountError: If the value is not a finite number, carries
            more than two decimal places, or is too large to represent
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Invalid amount: {value}")
    if isinstance(value, float):
        # repr is the shortest round-tripping form, so 0.1 stays 0.1
        value = repr(value)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(value)
        if not amount.is_finite():
            raise InvalidAmountError(f"Invalid amount: {value}")
        quantized = amount.quantize(CENT, rounding=ROUND_DOWN)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(f"Invalid amount: {value}")

    if quantized != amount:
        raise InvalidAmountError(f"Amount {amount} has more than two decimal places")
    return quantized


def add_amounts(balance: Decimal, delta: Decimal) -> Decimal:
    """
    Add two amounts exactly.

    Raises:
        InvalidAmountError: If the sum cannot be represented without rounding
    """
    with localcontext() as ctx:
        ctx.traps[Inexact] = True
        ctx.traps[Rounded] = True
        try:
            return balance + delta
        except (Inexact, Rounded):
            raise InvalidAmountError("Resulting balance is too large to represent exactly")


def format_amount(amount: Decimal) -> str:
    """Format an amount with exactly two decimal places."""
    return f"{amount:.2f}"
