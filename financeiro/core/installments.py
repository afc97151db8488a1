import asyncio
import logging
import uuid
from typing import List, Union

from supabase import Client

from financeiro.core import db
from financeiro.core.exceptions import PartialBatchError, PersistenceError, ValidationError
from financeiro.core.models import Category, ExpenseRecord, PaymentMethod, UserContext
from financeiro.utils.dates import MonthLike, add_months, canonicalize_month

logger = logging.getLogger(__name__)

MAX_INSTALLMENTS = 12


def _as_category(category: Union[Category, str, None]) -> Category:
    if isinstance(category, Category):
        return category
    if not category:
        raise ValidationError("category", "Selecione uma categoria")
    try:
        return Category(category)
    except ValueError:
        raise ValidationError("category", f"Categoria desconhecida: {category}") from None


def _as_payment_method(payment_method: Union[PaymentMethod, str, None]) -> PaymentMethod:
    if isinstance(payment_method, PaymentMethod):
        return payment_method
    if not payment_method:
        raise ValidationError("payment_method", "Selecione a forma de pagamento")
    try:
        return PaymentMethod(payment_method)
    except ValueError:
        raise ValidationError("payment_method", f"Forma de pagamento desconhecida: {payment_method}") from None


def validate_expense(total: Union[float, None],
                     description: Union[str, None],
                     category: Union[Category, str, None],
                     payment_method: Union[PaymentMethod, str, None],
                     installment_count: Union[int, None]) -> None:
    """
    Confere os dados do formulário de despesa antes de gerar as parcelas.
    Levanta ValidationError indicando o primeiro campo inválido.
    """
    if not description or not description.strip():
        raise ValidationError("description", "Informe a descrição")
    if total is None or total <= 0:
        raise ValidationError("value", "O valor deve ser maior que zero")
    _as_category(category)
    _as_payment_method(payment_method)
    if installment_count is None or not 1 <= installment_count <= MAX_INSTALLMENTS:
        raise ValidationError("installments", f"O número de parcelas deve estar entre 1 e {MAX_INSTALLMENTS}")


def generate(total: float,
             description: str,
             category: Union[Category, str],
             payment_method: Union[PaymentMethod, str],
             installment_count: int,
             start_month: MonthLike) -> List[ExpenseRecord]:
    """
    Divide uma compra em `installment_count` parcelas mensais.

    Cada parcela vale total / installment_count (sem redistribuir centavos), cai no
    mês start_month + i e leva o sufixo " (i/n)" na descrição quando há mais de uma.
    Todas compartilham o mesmo `installment_group`.
    """
    validate_expense(total, description, category, payment_method, installment_count)
    category = _as_category(category)
    payment_method = _as_payment_method(payment_method)
    start = canonicalize_month(start_month)
    base_description = description.strip()

    per_installment = total / installment_count
    installment_group = str(uuid.uuid4())

    records = []
    for i in range(installment_count):
        if installment_count > 1:
            installment_description = f"{base_description} ({i + 1}/{installment_count})"
        else:
            installment_description = base_description
        records.append(ExpenseRecord(
            description=installment_description,
            value=per_installment,
            category=category,
            payment_method=payment_method,
            month=add_months(start, i),
            installments=installment_count,
            current_installment=i + 1,
            installment_group=installment_group,
        ))
    return records


async def submit_installments(supabase_client: Client,
                              context: UserContext,
                              records: List[ExpenseRecord],
                              mode: str = "concurrent") -> int:
    """
    Grava as parcelas do usuário do contexto. Retorna quantas foram gravadas.

    No modo "concurrent" cada parcela é uma requisição, todas disparadas ao mesmo
    tempo; espera todas terminarem e, se alguma falhar, levanta o primeiro erro
    (PartialBatchError se outras já foram gravadas, sem desfazê-las).
    No modo "batch" todas vão em uma única requisição.
    """
    for record in records:
        record.user_id = context.user_id

    if mode == "batch":
        await asyncio.to_thread(db.insert_expenses, supabase_client, records)
        logger.info(f"{len(records)} parcelas gravadas em lote para o usuário {context.user_id}")
        return len(records)

    tasks = [asyncio.to_thread(db.insert_expense, supabase_client, record) for record in records]
    first_error = None
    succeeded = 0
    for finished in asyncio.as_completed(tasks):
        try:
            await finished
            succeeded += 1
        except PersistenceError as e:
            if first_error is None:
                first_error = e

    if first_error is not None:
        if succeeded == 0:
            raise first_error
        logger.warning(f"Gravação parcial: {succeeded}/{len(records)} parcelas para o usuário {context.user_id}")
        raise PartialBatchError(first_error, succeeded, len(records))

    logger.info(f"{succeeded} parcelas gravadas para o usuário {context.user_id}")
    return succeeded
