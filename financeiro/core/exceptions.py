# financeiro/core/exceptions.py
from typing import Optional


class FinanceiroError(Exception):
    """Erro base da aplicação."""
    def __init__(self, message: str = "Erro inesperado"):
        self.message = message
        super().__init__(self.message)


class ValidationError(FinanceiroError):
    """Entrada do usuário inválida. `field` indica qual campo falhou."""
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class AuthenticationError(FinanceiroError):
    """Nenhum usuário autenticado, ou falha ao entrar/cadastrar."""
    def __init__(self, message: str = "Usuário não autenticado"):
        super().__init__(message)


class PersistenceError(FinanceiroError):
    """Falha em uma operação do Supabase (insert, select, upsert)."""
    def __init__(self, message: str = "Erro ao acessar o banco de dados"):
        super().__init__(message)


class PartialBatchError(PersistenceError):
    """
    Uma ou mais parcelas falharam depois que outras já tinham sido gravadas.
    As parcelas gravadas NÃO são desfeitas.
    """
    def __init__(self, first_error: Optional[Exception], succeeded: int, total: int):
        self.first_error = first_error
        self.succeeded = succeeded
        self.total = total
        super().__init__(
            f"{succeeded} de {total} parcelas foram gravadas antes do erro: {first_error}"
        )
