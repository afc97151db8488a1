import datetime
from typing import Tuple, Union

from flask import current_app, session
from supabase import Client

from financeiro.core import db
from financeiro.core.exceptions import AuthenticationError, ValidationError
from financeiro.core.models import UserContext
from financeiro.utils.dates import canonicalize_month


def get_client(access_token: Union[str, None] = None) -> Client:
    """Cria o cliente Supabase da requisição, autorizado com o token do usuário."""
    return current_app.config["CLIENT_FACTORY"](access_token)


def selected_month(value: Union[str, None]) -> datetime.date:
    """Mês escolhido no seletor; o mês atual se vier vazio ou inválido."""
    if value:
        try:
            return canonicalize_month(value)
        except ValidationError:
            pass
    return canonicalize_month(datetime.date.today())


def current_context(month_value: Union[str, None] = None) -> Tuple[Client, UserContext]:
    """
    Resolve o usuário da sessão e monta o contexto da operação.
    Se o access token expirou, renova a sessão uma vez com o refresh token.
    Sem usuário autenticado, levanta AuthenticationError (tratado em app_setup).
    """
    access_token = session.get("access_token")
    client = get_client(access_token)
    user_id = db.get_current_user(client, access_token)

    if not user_id and session.get("refresh_token"):
        tokens = db.refresh_session(get_client(), session["refresh_token"])
        if tokens:
            session.update(tokens)
            access_token = tokens["access_token"]
            client = get_client(access_token)
            user_id = db.get_current_user(client, access_token)

    if not user_id:
        raise AuthenticationError()
    return client, UserContext(user_id=user_id, month=selected_month(month_value), access_token=access_token)
