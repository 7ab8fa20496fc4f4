"""Domain constants for the finance tracker."""

from decimal import Decimal

MONTH_NAMES = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)

SHORT_MONTH_NAMES = (
    "Ene",
    "Feb",
    "Mar",
    "Abr",
    "May",
    "Jun",
    "Jul",
    "Ago",
    "Sep",
    "Oct",
    "Nov",
    "Dic",
)

INCOME_CATEGORIES = (
    "Recaudos de plataformas",
    "Retiros",
    "Ventas Directas",
    "Otros",
)

EXPENSE_CATEGORIES = (
    "Pago de tarjeta de crédito",
    "Publicidad",
    "Mercancía",
    "Préstamos",
    "Flete",
    "Servicio al cliente",
    "Préstamos de urgencia",
    "Nómina",
    "Otros",
)

DEFAULT_EXCHANGE_RATE = Decimal("58.50")
DEFAULT_APP_NAME = "FinCommand"

# Grace periods are matched in order; the first issuer keyword found wins.
ISSUER_GRACE_PERIODS = (
    ("bhd", 25),
    ("reservas", 22),
)
DEFAULT_GRACE_PERIOD_DAYS = 20

CRITICAL_DAYS_THRESHOLD = 5
ATTENTION_DAYS_THRESHOLD = 12

DEFAULT_DEBT_LABEL = "Consumo"

BALANCE_SOURCES = (
    "Banco Popular",
    "Banco BHD",
    "BanReservas",
    "Efectivo",
)
MIN_DAYS_REMAINING = 1
MAX_DAYS_REMAINING = 31

IMPORTED_LABEL = "Importado"
MANUAL_INCOME_DESCRIPTION = "Ingreso Manual"
MANUAL_EXPENSE_DESCRIPTION = "Gasto Manual"
DEFAULT_CATEGORY = "Otros"
DEFAULT_PAYMENT_METHOD = "Efectivo"


__all__ = [
    "MONTH_NAMES",
    "SHORT_MONTH_NAMES",
    "INCOME_CATEGORIES",
    "EXPENSE_CATEGORIES",
    "DEFAULT_EXCHANGE_RATE",
    "DEFAULT_APP_NAME",
    "ISSUER_GRACE_PERIODS",
    "DEFAULT_GRACE_PERIOD_DAYS",
    "CRITICAL_DAYS_THRESHOLD",
    "ATTENTION_DAYS_THRESHOLD",
    "DEFAULT_DEBT_LABEL",
    "BALANCE_SOURCES",
    "MIN_DAYS_REMAINING",
    "MAX_DAYS_REMAINING",
    "IMPORTED_LABEL",
    "MANUAL_INCOME_DESCRIPTION",
    "MANUAL_EXPENSE_DESCRIPTION",
    "DEFAULT_CATEGORY",
    "DEFAULT_PAYMENT_METHOD",
]
