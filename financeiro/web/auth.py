import logging

from flask import flash, redirect, render_template, request, session, url_for

from financeiro.core import db
from financeiro.core.exceptions import AuthenticationError
from financeiro.web.session import get_client

logger = logging.getLogger(__name__)


def index():
    """Envia para o dashboard quem já tem sessão, e para o login quem não tem."""
    if session.get("access_token"):
        return redirect(url_for("dashboard"))
    return redirect(url_for("login"))


def _credentials_from_form():
    email = (request.form.get("email") or "").strip()
    password = request.form.get("password") or ""
    return email, password


def login():
    if request.method == "GET":
        if session.get("access_token"):
            return redirect(url_for("dashboard"))
        return render_template("login.html")

    email, password = _credentials_from_form()
    if not email or not password:
        flash("Informe email e senha", "error")
        return render_template("login.html", email=email), 400

    try:
        tokens = db.sign_in(get_client(), email, password)
    except AuthenticationError as e:
        flash(e.message, "error")
        return render_template("login.html", email=email), 401

    session.clear()
    session.update(tokens)
    logger.info(f"Usuário {email} entrou")
    return redirect(url_for("dashboard"))


def signup():
    email, password = _credentials_from_form()
    if not email or not password:
        flash("Informe email e senha", "error")
        return render_template("login.html", email=email), 400

    try:
        tokens = db.sign_up(get_client(), email, password)
    except AuthenticationError as e:
        flash(e.message, "error")
        return render_template("login.html", email=email), 400

    if tokens is None:
        flash("Cadastro realizado! Confirme seu email para entrar.", "success")
        return redirect(url_for("login"))

    session.clear()
    session.update(tokens)
    return redirect(url_for("dashboard"))


def logout():
    access_token = session.get("access_token")
    refresh_token = session.get("refresh_token")
    if access_token and refresh_token:
        db.sign_out(get_client(access_token), access_token, refresh_token)
    session.clear()
    return redirect(url_for("login"))
