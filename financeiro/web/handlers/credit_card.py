import logging

from flask import flash, redirect, request, url_for

from financeiro.core import db
from financeiro.core.exceptions import PersistenceError
from financeiro.utils.text_utils import parse_amount
from financeiro.web.session import current_context

logger = logging.getLogger(__name__)


def save_card_limit():
    """Cria ou substitui o limite do cartão do usuário."""
    client, context = current_context(request.form.get("month"))
    back_to_dashboard = redirect(url_for("dashboard", month=context.month.isoformat()))

    card_limit = parse_amount(request.form.get("card_limit"))
    if card_limit is None or card_limit < 0:
        flash("Informe um limite válido", "error")
        return back_to_dashboard

    try:
        db.upsert_card_limit(client, context.user_id, card_limit)
    except PersistenceError as e:
        flash(e.message, "error")
        return back_to_dashboard

    logger.info(f"Limite do cartão do usuário {context.user_id} atualizado para R${card_limit:.2f}")
    flash("Limite do cartão atualizado com sucesso", "success")
    return back_to_dashboard
