import logging
from typing import Any, Dict, List, Union

from supabase import create_client, Client

from financeiro.config import SUPABASE_URL, SUPABASE_KEY
from financeiro.core.exceptions import AuthenticationError, PersistenceError
from financeiro.core.models import ExpenseRecord, Income, PaymentMethod
from financeiro.utils.dates import add_months, month_key

logger = logging.getLogger(__name__)

EXPENSES_TABLE = 'expenses'
INCOME_TABLE = 'income'
CARD_LIMITS_TABLE = 'credit_card_limits'


def get_supabase_client(access_token: Union[str, None] = None) -> Client:
    """
    Retorna uma instância do cliente Supabase.
    Se `access_token` for informado, as consultas ao banco usam o JWT do usuário
    (necessário para as políticas de RLS).
    """
    client = create_client(SUPABASE_URL, SUPABASE_KEY)
    if access_token:
        client.postgrest.auth(access_token)
    return client


# --- Funções de Autenticação ---
def sign_in(supabase_client: Client, email: str, password: str) -> Dict[str, str]:
    """Entra com email e senha. Retorna os tokens da sessão."""
    try:
        response = supabase_client.auth.sign_in_with_password({"email": email, "password": password})
    except Exception as e:
        logger.error(f"Erro ao entrar no Supabase: {e}")
        raise AuthenticationError("Email ou senha inválidos") from e

    if not response.session:
        raise AuthenticationError("Confirme seu email antes de entrar")
    return {
        "access_token": response.session.access_token,
        "refresh_token": response.session.refresh_token,
    }


def sign_up(supabase_client: Client, email: str, password: str) -> Union[Dict[str, str], None]:
    """
    Cadastra um novo usuário. Retorna os tokens se o Supabase já abrir uma sessão,
    ou None quando o cadastro depende de confirmação por email.
    """
    try:
        response = supabase_client.auth.sign_up({"email": email, "password": password})
    except Exception as e:
        logger.error(f"Erro ao cadastrar usuário no Supabase: {e}")
        raise AuthenticationError("Não foi possível realizar o cadastro") from e

    if response.session:
        return {
            "access_token": response.session.access_token,
            "refresh_token": response.session.refresh_token,
        }
    return None


def sign_out(supabase_client: Client, access_token: str, refresh_token: str) -> None:
    """Encerra a sessão no Supabase (revoga o refresh token)."""
    try:
        supabase_client.auth.set_session(access_token, refresh_token)
        supabase_client.auth.sign_out()
    except Exception as e:
        # A sessão local é descartada de qualquer forma
        logger.warning(f"Erro ao sair do Supabase: {e}")


def refresh_session(supabase_client: Client, refresh_token: Union[str, None]) -> Union[Dict[str, str], None]:
    """Troca o refresh token por uma sessão nova. Retorna os tokens, ou None se não for possível."""
    if not refresh_token:
        return None
    try:
        response = supabase_client.auth.refresh_session(refresh_token)
    except Exception as e:
        logger.warning(f"Não foi possível renovar a sessão no Supabase: {e}")
        return None
    if not response or not response.session:
        return None
    return {
        "access_token": response.session.access_token,
        "refresh_token": response.session.refresh_token,
    }


def get_current_user(supabase_client: Client, access_token: Union[str, None]) -> Union[str, None]:
    """Obtém o id do usuário dono do token, ou None se não houver usuário válido."""
    if not access_token:
        return None
    try:
        response = supabase_client.auth.get_user(access_token)
    except Exception as e:
        logger.warning(f"Token de sessão rejeitado pelo Supabase: {e}")
        return None
    if not response or not response.user:
        return None
    return response.user.id


# --- Funções para Despesas ---
def insert_expense(supabase_client: Client, expense: ExpenseRecord) -> Dict[str, Any]:
    """Adiciona uma despesa (uma parcela) ao Supabase."""
    try:
        response = supabase_client.table(EXPENSES_TABLE).insert(expense.to_row()).execute()
    except Exception as e:
        logger.error(f"Erro ao adicionar despesa no Supabase: {e}")
        raise PersistenceError(f"Não foi possível adicionar a despesa '{expense.description}'") from e
    return response.data[0] if response.data else {}


def insert_expenses(supabase_client: Client, expenses: List[ExpenseRecord]) -> List[Dict[str, Any]]:
    """Adiciona várias despesas em uma única requisição."""
    try:
        response = supabase_client.table(EXPENSES_TABLE).insert([e.to_row() for e in expenses]).execute()
    except Exception as e:
        logger.error(f"Erro ao adicionar {len(expenses)} despesas no Supabase: {e}")
        raise PersistenceError("Não foi possível adicionar a despesa") from e
    return response.data or []


def get_expenses(supabase_client: Client, user_id: str, month) -> List[ExpenseRecord]:
    """Obtém as despesas do usuário em um mês."""
    try:
        response = (
            supabase_client.table(EXPENSES_TABLE)
            .select('*')
            .eq('user_id', user_id)
            .eq('month', month_key(month))
            .order('description')
            .execute()
        )
    except Exception as e:
        logger.error(f"Erro ao obter despesas do Supabase: {e}")
        raise PersistenceError("Não foi possível carregar as despesas") from e
    return [ExpenseRecord.from_row(row) for row in response.data]


def get_future_credit_card_expenses(supabase_client: Client, user_id: str, month) -> List[ExpenseRecord]:
    """
    Obtém as despesas no cartão de crédito dos 12 meses seguintes ao mês informado
    (exclusive o próprio mês, inclusive o 12º mês).
    """
    try:
        response = (
            supabase_client.table(EXPENSES_TABLE)
            .select('*')
            .eq('user_id', user_id)
            .eq('payment_method', PaymentMethod.CREDIT_CARD.value)
            .gt('month', month_key(month))
            .lte('month', add_months(month, 12).isoformat())
            .order('month')
            .execute()
        )
    except Exception as e:
        logger.error(f"Erro ao obter parcelas futuras do Supabase: {e}")
        raise PersistenceError("Não foi possível carregar as parcelas futuras") from e
    return [ExpenseRecord.from_row(row) for row in response.data]


# --- Funções para Receitas ---
def add_income(supabase_client: Client, income: Income) -> Dict[str, Any]:
    """Adiciona uma nova receita ao Supabase."""
    try:
        response = supabase_client.table(INCOME_TABLE).insert(income.to_row()).execute()
    except Exception as e:
        logger.error(f"Erro ao adicionar receita no Supabase: {e}")
        raise PersistenceError("Não foi possível adicionar a receita") from e
    return response.data[0] if response.data else {}


def get_income(supabase_client: Client, user_id: str, month) -> List[Income]:
    """Obtém as receitas do usuário em um mês."""
    try:
        response = (
            supabase_client.table(INCOME_TABLE)
            .select('*')
            .eq('user_id', user_id)
            .eq('month', month_key(month))
            .execute()
        )
    except Exception as e:
        logger.error(f"Erro ao obter receitas do Supabase: {e}")
        raise PersistenceError("Não foi possível carregar as receitas") from e
    return [Income.from_row(row) for row in response.data]


# --- Funções para o Limite do Cartão ---
def get_card_limit(supabase_client: Client, user_id: str) -> Union[float, None]:
    """Obtém o limite do cartão do usuário, ou None se ainda não foi definido."""
    try:
        response = (
            supabase_client.table(CARD_LIMITS_TABLE)
            .select('card_limit')
            .eq('user_id', user_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        logger.error(f"Erro ao buscar limite do cartão no Supabase: {e}")
        raise PersistenceError("Não foi possível buscar o limite") from e

    if not response.data or response.data[0].get('card_limit') is None:
        return None
    return float(response.data[0]['card_limit'])


def upsert_card_limit(supabase_client: Client, user_id: str, card_limit: float) -> None:
    """Cria ou substitui o limite do cartão do usuário (uma linha por usuário)."""
    try:
        supabase_client.table(CARD_LIMITS_TABLE).upsert(
            {'user_id': user_id, 'card_limit': card_limit},
            on_conflict='user_id',
        ).execute()
    except Exception as e:
        logger.error(f"Erro ao salvar limite do cartão no Supabase: {e}")
        raise PersistenceError("Não foi possível salvar o limite") from e
