import datetime
import unittest

from financeiro.core import charts
from financeiro.core.models import Category, ExpenseRecord, PaymentMethod, Totals

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def expense(description, value):
    return ExpenseRecord(description=description, value=value, category=Category.OUTROS,
                         payment_method=PaymentMethod.PIX, month=datetime.date(2024, 1, 1))


class TestCharts(unittest.TestCase):
    def test_balance_chart_png(self):
        buf = charts.generate_balance_chart(Totals(total_income=5000, total_expenses=3200))
        self.assertIsNotNone(buf)
        self.assertEqual(buf.read(8), PNG_SIGNATURE)

    def test_balance_chart_without_data(self):
        self.assertIsNone(charts.generate_balance_chart(Totals()))

    def test_expense_distribution_chart_png(self):
        buf = charts.generate_expense_distribution_chart(
            [expense("Aluguel", 1500), expense("Mercado", 600), expense("Mercado", 150)]
        )
        self.assertIsNotNone(buf)
        self.assertEqual(buf.read(8), PNG_SIGNATURE)

    def test_expense_distribution_chart_without_expenses(self):
        self.assertIsNone(charts.generate_expense_distribution_chart([]))
