import datetime
from typing import List, Tuple, Union

from financeiro.core.exceptions import ValidationError

MonthLike = Union[str, datetime.date, datetime.datetime]

MONTH_NAMES = [
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
]


def canonicalize_month(value: MonthLike) -> datetime.date:
    """
    Normaliza uma data para o primeiro dia do mês.
    Aceita `date`, `datetime` ou string ISO ("AAAA-MM" ou "AAAA-MM-DD").
    """
    if isinstance(value, datetime.datetime):
        return value.date().replace(day=1)
    if isinstance(value, datetime.date):
        return value.replace(day=1)
    if isinstance(value, str):
        text = value.strip()
        for fmt in ("%Y-%m-%d", "%Y-%m"):
            try:
                return datetime.datetime.strptime(text[:10], fmt).date().replace(day=1)
            except ValueError:
                continue
    raise ValidationError("month", f"Mês inválido: {value!r}")


def month_key(value: MonthLike) -> str:
    """Retorna o mês canônico como string ("AAAA-MM-01"), usada no Supabase."""
    return canonicalize_month(value).isoformat()


def add_months(value: MonthLike, n: int) -> datetime.date:
    """Avança (ou recua, se n < 0) n meses, virando o ano quando necessário."""
    month = canonicalize_month(value)
    index = month.year * 12 + (month.month - 1) + n
    year, month_zero_based = divmod(index, 12)
    return datetime.date(year, month_zero_based + 1, 1)


def month_label(value: MonthLike) -> str:
    month = canonicalize_month(value)
    return f"{MONTH_NAMES[month.month - 1]}/{month.year}"


def month_options(today: Union[datetime.date, None] = None, count: int = 12) -> List[Tuple[str, str]]:
    """Lista os meses selecionáveis: o mês atual e os próximos, como pares (chave, rótulo)."""
    start = canonicalize_month(today or datetime.date.today())
    options = []
    for i in range(count):
        month = add_months(start, i)
        options.append((month.isoformat(), month_label(month)))
    return options
