from .credit_card import save_card_limit
from .expense import register_expense
from .income import register_income
