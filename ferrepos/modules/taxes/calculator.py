"""
Cálculo de totales de venta con IVA paraguayo

En Paraguay los precios de venta al público incluyen el IVA, por lo que el
impuesto se "extrae" del monto de cada línea:
- IVA 10%: impuesto = monto / 11
- IVA 5%:  impuesto = monto / 21

(si base + base * r = monto, entonces impuesto = monto * r / (1 + r);
para r = 0.10 es 1/11 y para r = 0.05 es 1/21)
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Dict, Iterable, List

from ferrepos.modules.taxes.schemas import CartLine, SaleTotals, VatRate

# Divisor que extrae el IVA de un monto con IVA incluido
VAT_DIVISORS: Dict[int, Decimal] = {
    VatRate.TEN: Decimal(11),
    VatRate.FIVE: Decimal(21),
}

CENTS = Decimal("0.01")

# Dígitos de trabajo: alcanza para precio * cantidad sin truncar
PRECISION = 100


class TotalsError(ValueError):
    """Error base del cálculo de totales"""


class InvalidLineError(TotalsError):
    """Línea de carrito con precio o cantidad inválidos"""


class InvalidRateError(TotalsError):
    """Línea de carrito con una tasa de IVA distinta de 5 o 10"""


def _quantize(amount: Decimal) -> Decimal:
    # Redondeo comercial a 2 decimales
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def validate_line(line: CartLine) -> None:
    """
    Validar una línea de carrito antes de totalizar

    Raises:
        InvalidLineError: precio negativo o cantidad menor a 1
        InvalidRateError: tasa de IVA no reconocida
    """
    if line.unit_price < 0:
        raise InvalidLineError(f"Precio unitario negativo: {line.unit_price}")
    if line.quantity < 1:
        raise InvalidLineError(f"Cantidad inválida: {line.quantity}")
    if line.vat_rate not in VAT_DIVISORS:
        raise InvalidRateError(f"Tasa de IVA no soportada: {line.vat_rate}")


def compute_line_tax(amount: Decimal, vat_rate: int) -> Decimal:
    """IVA contenido en un monto con IVA incluido, sin redondear"""
    if vat_rate not in VAT_DIVISORS:
        raise InvalidRateError(f"Tasa de IVA no soportada: {vat_rate}")
    return Decimal(amount) / VAT_DIVISORS[vat_rate]


def compute_totals(lines: Iterable[CartLine]) -> SaleTotals:
    """
    Calcular los totales de una venta

    El total es la suma exacta de precio * cantidad de cada línea. El IVA de
    cada tasa se acumula sin redondear y se redondea una sola vez al final; la
    base imponible se obtiene por diferencia, de modo que
    subtotal + vat10 + vat5 == total siempre es exacto.

    Args:
        lines: Líneas del carrito (precio con IVA incluido)

    Returns:
        SaleTotals con subtotal, vat10, vat5 y total

    Raises:
        InvalidLineError, InvalidRateError
    """
    with localcontext() as ctx:
        ctx.prec = PRECISION
        total = Decimal("0")
        vat_buckets: Dict[int, Decimal] = {rate: Decimal("0") for rate in VAT_DIVISORS}

        for line in lines:
            validate_line(line)
            amount = Decimal(line.unit_price) * line.quantity
            total += amount
            vat_buckets[line.vat_rate] += compute_line_tax(amount, line.vat_rate)

        try:
            vat10 = _quantize(vat_buckets[VatRate.TEN])
            vat5 = _quantize(vat_buckets[VatRate.FIVE])
        except InvalidOperation:
            raise InvalidLineError(f"Monto fuera de rango: {total}")

        # El total no se redondea: es la suma exacta de las líneas
        return SaleTotals(
            subtotal=total - vat10 - vat5,
            vat10=vat10,
            vat5=vat5,
            total=total,
        )


def get_paraguay_vat_rates() -> List[Dict]:
    """
    Tasas de IVA vigentes en Paraguay
    Útil para interfaces de usuario
    """
    return [
        {
            "rate": int(VatRate.TEN),
            "name": "IVA 10%",
            "divisor": 11,
            "description": "Tasa general (herramientas, pinturas, materiales)",
        },
        {
            "rate": int(VatRate.FIVE),
            "name": "IVA 5%",
            "divisor": 21,
            "description": "Tasa reducida (canasta básica, productos agrícolas)",
        },
    ]
