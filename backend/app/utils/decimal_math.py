from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


MONEY_QUANT = Decimal("0.01")
PCT_QUANT = Decimal("0.01")


def money(value: Decimal | int | float | str | None) -> Decimal:
    if value is None or value == "":
        return Decimal("0.00")
    try:
        return Decimal(str(value)).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid money amount: {value!r}") from exc


def pct(value: Decimal | int | float | str) -> Decimal:
    return Decimal(str(value)).quantize(PCT_QUANT, rounding=ROUND_HALF_UP)


def safe_pct(numerator: Decimal | int, denominator: Decimal | int) -> Decimal:
    if not denominator:
        return pct(0)
    return pct((Decimal(numerator) / Decimal(denominator)) * Decimal("100"))
