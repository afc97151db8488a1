import math
from typing import Iterable, List, Tuple, Union

from supabase import Client

from financeiro.core import db
from financeiro.core.models import ExpenseRecord, Income, PaymentMethod, Totals, UserContext
from financeiro.utils.dates import MonthLike, add_months, canonicalize_month


def _is_credit_card(expense: ExpenseRecord) -> bool:
    return expense.payment_method == PaymentMethod.CREDIT_CARD


def aggregate(expenses: Iterable[ExpenseRecord],
              income: Iterable[Income],
              reference_month: MonthLike,
              future_expenses: Iterable[ExpenseRecord] = (),
              card_limit: Union[float, None] = 0.0) -> Totals:
    """
    Calcula os totais do mês.

    `expenses` e `income` são os registros do mês de referência; `future_expenses`
    vem de uma consulta separada e mais ampla. Só entram nas parcelas futuras as
    despesas no cartão com mês em (referência, referência + 12 meses].
    `math.fsum` deixa as somas independentes da ordem dos registros.
    """
    expenses = list(expenses)
    reference = canonicalize_month(reference_month)
    horizon = add_months(reference, 12)
    card_limit = card_limit or 0.0

    credit_card_expenses = math.fsum(e.value for e in expenses if _is_credit_card(e))
    future_installments = math.fsum(
        e.value for e in future_expenses
        if _is_credit_card(e) and reference < canonicalize_month(e.month) <= horizon
    )

    return Totals(
        total_income=math.fsum(i.value for i in income),
        total_expenses=math.fsum(e.value for e in expenses),
        credit_card_expenses=credit_card_expenses,
        future_installments=future_installments,
        card_limit=card_limit,
        available=card_limit - credit_card_expenses,
    )


def build_summary(supabase_client: Client, context: UserContext) -> Tuple[Totals, List[ExpenseRecord]]:
    """Busca os dados do mês do contexto no Supabase e devolve (totais, despesas do mês)."""
    expenses = db.get_expenses(supabase_client, context.user_id, context.month)
    income = db.get_income(supabase_client, context.user_id, context.month)
    future_expenses = db.get_future_credit_card_expenses(supabase_client, context.user_id, context.month)
    card_limit = db.get_card_limit(supabase_client, context.user_id)

    totals = aggregate(expenses, income, context.month, future_expenses, card_limit)
    return totals, expenses
