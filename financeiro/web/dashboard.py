from flask import flash, render_template, request, send_file

from financeiro.core import charts, db
from financeiro.core.aggregation import aggregate, build_summary
from financeiro.core.exceptions import PersistenceError
from financeiro.core.installments import MAX_INSTALLMENTS
from financeiro.core.models import Category, PaymentMethod, Totals
from financeiro.utils.dates import month_label, month_options
from financeiro.web.session import current_context


def dashboard():
    """Mostra os totais, o seletor de mês, os formulários e as despesas do mês."""
    client, context = current_context(request.args.get("month"))
    month = context.month.isoformat()

    try:
        totals, expenses = build_summary(client, context)
    except PersistenceError as e:
        flash(e.message, "error")
        totals, expenses = Totals(), []

    options = month_options()
    if month not in [key for key, _ in options]:
        options.insert(0, (month, month_label(context.month)))

    return render_template(
        "dashboard.html",
        month=month,
        month_options=options,
        totals=totals,
        expenses=expenses,
        categories=list(Category),
        payment_methods=list(PaymentMethod),
        max_installments=MAX_INSTALLMENTS,
    )


def balance_chart():
    """Gráfico de barras (receitas vs. despesas) do mês, em PNG."""
    client, context = current_context(request.args.get("month"))
    try:
        expenses = db.get_expenses(client, context.user_id, context.month)
        income = db.get_income(client, context.user_id, context.month)
    except PersistenceError:
        return "", 503

    buf = charts.generate_balance_chart(aggregate(expenses, income, context.month))
    if buf is None:
        return "", 204
    return send_file(buf, mimetype="image/png")


def expenses_chart():
    """Gráfico de pizza com a distribuição das despesas do mês, em PNG."""
    client, context = current_context(request.args.get("month"))
    try:
        expenses = db.get_expenses(client, context.user_id, context.month)
    except PersistenceError:
        return "", 503

    buf = charts.generate_expense_distribution_chart(expenses)
    if buf is None:
        return "", 204
    return send_file(buf, mimetype="image/png")
