from flask import current_app, flash, redirect, request, url_for

from financeiro.core.exceptions import PartialBatchError, PersistenceError, ValidationError
from financeiro.core.installments import generate, submit_installments
from financeiro.utils.text_utils import parse_amount, parse_int
from financeiro.web.session import current_context


async def register_expense():
    """Gera as parcelas da despesa do formulário e grava todas no Supabase."""
    client, context = current_context(request.form.get("month"))
    back_to_dashboard = redirect(url_for("dashboard", month=context.month.isoformat()))

    try:
        records = generate(
            total=parse_amount(request.form.get("value")),
            description=request.form.get("description"),
            category=request.form.get("category"),
            payment_method=request.form.get("payment_method"),
            installment_count=parse_int(request.form.get("installments"), default=1),
            start_month=context.month,
        )
    except ValidationError as e:
        flash(e.message, "error")
        return back_to_dashboard

    try:
        await submit_installments(client, context, records, mode=current_app.config["INSTALLMENT_INSERT_MODE"])
    except PartialBatchError as e:
        flash(f"Não foi possível adicionar todas as parcelas. {e.message}", "error")
    except PersistenceError as e:
        flash(e.message, "error")
    else:
        flash("Despesa adicionada com sucesso", "success")
    return back_to_dashboard
