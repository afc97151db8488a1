# financeiro/core/models.py
from dataclasses import dataclass, field, asdict
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional


# Os registros vindos do Supabase são dicionários; estes modelos são usados
# pela lógica de parcelas e agregação, e convertidos de/para dicionários
# nas bordas (db.py).


class Category(Enum):
    ALIMENTACAO = 'alimentacao'
    TRANSPORTE = 'transporte'
    MORADIA = 'moradia'
    SAUDE = 'saude'
    EDUCACAO = 'educacao'
    LAZER = 'lazer'
    VESTUARIO = 'vestuario'
    OUTROS = 'outros'

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    Category.ALIMENTACAO: 'Alimentação',
    Category.TRANSPORTE: 'Transporte',
    Category.MORADIA: 'Moradia',
    Category.SAUDE: 'Saúde',
    Category.EDUCACAO: 'Educação',
    Category.LAZER: 'Lazer',
    Category.VESTUARIO: 'Vestuário',
    Category.OUTROS: 'Outros',
}


class PaymentMethod(Enum):
    MONEY = 'money'
    CREDIT_CARD = 'credit_card'
    DEBIT_CARD = 'debit_card'
    PIX = 'pix'

    @property
    def label(self) -> str:
        return PAYMENT_METHOD_LABELS[self]


PAYMENT_METHOD_LABELS = {
    PaymentMethod.MONEY: 'Dinheiro',
    PaymentMethod.CREDIT_CARD: 'Cartão de Crédito',
    PaymentMethod.DEBIT_CARD: 'Cartão de Débito',
    PaymentMethod.PIX: 'Pix',
}


@dataclass
class ExpenseRecord:
    description: str
    value: float
    category: Category
    payment_method: PaymentMethod
    month: date
    installments: int = 1
    current_installment: int = 1
    installment_group: Optional[str] = None
    user_id: Optional[str] = None
    id: Optional[str] = None

    def to_row(self) -> Dict[str, Any]:
        """Dicionário no formato da tabela `expenses` (sem `id`, gerado pelo banco)."""
        row = asdict(self)
        del row['id']
        row['category'] = self.category.value
        row['payment_method'] = self.payment_method.value
        row['month'] = self.month.isoformat()
        return row

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'ExpenseRecord':
        return cls(
            id=row.get('id'),
            user_id=row.get('user_id'),
            description=row.get('description') or '',
            value=float(row.get('value') or 0),
            category=Category(row.get('category') or Category.OUTROS.value),
            payment_method=PaymentMethod(row.get('payment_method') or PaymentMethod.MONEY.value),
            month=date.fromisoformat(str(row['month'])[:10]),
            installments=int(row.get('installments') or 1),
            current_installment=int(row.get('current_installment') or 1),
            installment_group=row.get('installment_group'),
        )


@dataclass
class Income:
    value: float
    month: date
    description: Optional[str] = None
    user_id: Optional[str] = None
    id: Optional[str] = None

    def to_row(self) -> Dict[str, Any]:
        return {
            'user_id': self.user_id,
            'value': self.value,
            'month': self.month.isoformat(),
            'description': self.description,
        }

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Income':
        return cls(
            id=row.get('id'),
            user_id=row.get('user_id'),
            value=float(row.get('value') or 0),
            month=date.fromisoformat(str(row['month'])[:10]),
            description=row.get('description'),
        )


@dataclass
class UserContext:
    """Contexto explícito de cada operação: quem é o usuário e qual mês está selecionado."""
    user_id: str
    month: date
    access_token: Optional[str] = field(default=None, repr=False)


@dataclass
class Totals:
    total_income: float = 0.0
    total_expenses: float = 0.0
    credit_card_expenses: float = 0.0
    future_installments: float = 0.0
    card_limit: float = 0.0
    available: float = 0.0

    @property
    def balance(self) -> float:
        return self.total_income - self.total_expenses

    @property
    def over_limit(self) -> bool:
        return self.available < 0
