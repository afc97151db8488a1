import logging

from flask import flash, redirect, request, url_for

from financeiro.core import db
from financeiro.core.exceptions import PersistenceError
from financeiro.core.models import Income
from financeiro.utils.text_utils import parse_amount
from financeiro.web.session import current_context

logger = logging.getLogger(__name__)


def register_income():
    """Registra uma receita no mês selecionado."""
    client, context = current_context(request.form.get("month"))
    back_to_dashboard = redirect(url_for("dashboard", month=context.month.isoformat()))

    value = parse_amount(request.form.get("value"))
    if value is None or value <= 0:
        flash("O valor deve ser maior que zero", "error")
        return back_to_dashboard

    description = (request.form.get("description") or "").strip() or None
    income = Income(value=value, month=context.month, description=description, user_id=context.user_id)
    try:
        db.add_income(client, income)
    except PersistenceError as e:
        flash(e.message, "error")
        return back_to_dashboard

    logger.info(f"Receita de R${value:.2f} registrada para o usuário {context.user_id}")
    flash("Receita adicionada com sucesso", "success")
    return back_to_dashboard
