# financeiro/web/app_setup.py
import logging

from flask import Flask, flash, redirect, session, url_for

from financeiro.core.exceptions import AuthenticationError
from financeiro.utils.text_utils import format_brl
from financeiro.web.auth import index, login, logout, signup
from financeiro.web.dashboard import balance_chart, dashboard, expenses_chart
from financeiro.web.handlers import register_expense, register_income, save_card_limit

logger = logging.getLogger(__name__)


def handle_authentication_error(error: AuthenticationError):
    """Sem usuário autenticado: descarta a sessão e volta para o login."""
    logger.info(f"Acesso sem autenticação: {error.message}")
    session.clear()
    flash(error.message, "error")
    return redirect(url_for("login"))


def setup_app(config: dict) -> Flask:
    """
    Configura a aplicação Flask (rotas, formulários, tratamento de erros).
    Retorna o objeto Flask pronto para ser servido por um servidor WSGI.
    """
    app = Flask(__name__)
    app.secret_key = config["SECRET_KEY"]

    # Fábrica de clientes Supabase: recebe o access token do usuário (ou None)
    app.config["CLIENT_FACTORY"] = config["CLIENT_FACTORY"]
    app.config["INSTALLMENT_INSERT_MODE"] = config.get("INSTALLMENT_INSERT_MODE", "concurrent")

    app.jinja_env.filters["brl"] = format_brl

    # --- Autenticação ---
    app.add_url_rule("/", "index", index)
    app.add_url_rule("/login", "login", login, methods=["GET", "POST"])
    app.add_url_rule("/signup", "signup", signup, methods=["POST"])
    app.add_url_rule("/logout", "logout", logout, methods=["POST"])

    # --- Dashboard e gráficos ---
    app.add_url_rule("/dashboard", "dashboard", dashboard)
    app.add_url_rule("/charts/balance.png", "balance_chart", balance_chart)
    app.add_url_rule("/charts/expenses.png", "expenses_chart", expenses_chart)

    # --- Formulários ---
    app.add_url_rule("/expenses", "register_expense", register_expense, methods=["POST"])
    app.add_url_rule("/income", "register_income", register_income, methods=["POST"])
    app.add_url_rule("/credit-card-limit", "save_card_limit", save_card_limit, methods=["POST"])

    app.register_error_handler(AuthenticationError, handle_authentication_error)

    logger.info("Aplicação Flask configurada. Pronta para ser servida pelo WSGI.")
    return app
