from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

_CENTAVOS = Decimal("0.01")


def format_currency(value: Decimal | float | int) -> str:
    """
    Formata um preço em reais no padrão brasileiro (R$ 1.234,56),
    sem depender do locale instalado na máquina.
    """
    valor = Decimal(str(value)).quantize(_CENTAVOS, rounding=ROUND_HALF_UP)
    return f"R$ {valor:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


def format_date(d: datetime) -> str:
    return d.strftime("%d/%m/%Y %H:%M")
