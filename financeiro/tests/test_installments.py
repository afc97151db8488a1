import datetime
import math
import unittest
from unittest.mock import MagicMock, patch

from supabase import Client

from financeiro.core import installments
from financeiro.core.exceptions import PartialBatchError, PersistenceError, ValidationError
from financeiro.core.models import Category, PaymentMethod, UserContext
from financeiro.utils.dates import add_months


class TestGenerate(unittest.TestCase):
    def test_laptop_example(self):
        records = installments.generate(1200.00, "Laptop", "outros", "credit_card", 3, datetime.date(2024, 1, 1))

        self.assertEqual([r.month for r in records],
                         [datetime.date(2024, 1, 1), datetime.date(2024, 2, 1), datetime.date(2024, 3, 1)])
        self.assertEqual([r.value for r in records], [400.0, 400.0, 400.0])
        self.assertEqual([r.description for r in records], ["Laptop (1/3)", "Laptop (2/3)", "Laptop (3/3)"])
        self.assertEqual(len({r.installment_group for r in records}), 1)
        self.assertTrue(all(r.category == Category.OUTROS for r in records))
        self.assertTrue(all(r.payment_method == PaymentMethod.CREDIT_CARD for r in records))

    def test_every_installment_count(self):
        start = datetime.date(2024, 6, 1)
        for count in range(1, 13):
            for total in (0.01, 100.0, 99.99, 1234.56):
                records = installments.generate(total, "Compra", "lazer", "pix", count, start)
                self.assertEqual(len(records), count)
                self.assertEqual({r.current_installment for r in records}, set(range(1, count + 1)))
                self.assertEqual(len({r.installment_group for r in records}), 1)
                self.assertTrue(all(r.installments == count for r in records))
                expected_months = [add_months(start, i) for i in range(count)]
                self.assertEqual([r.month for r in records], expected_months)
                self.assertTrue(math.isclose(sum(r.value for r in records), total, rel_tol=1e-9))

    def test_single_installment_has_no_suffix(self):
        records = installments.generate(50.0, "Mercado", "alimentacao", "money", 1, datetime.date(2024, 1, 1))
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].description, "Mercado")
        self.assertEqual(records[0].current_installment, 1)

    def test_uneven_division_is_not_redistributed(self):
        records = installments.generate(100.0, "Curso", "educacao", "credit_card", 3, datetime.date(2024, 1, 1))
        self.assertTrue(all(r.value == 100.0 / 3 for r in records))

    def test_start_month_is_canonicalized(self):
        records = installments.generate(300.0, "Sofá", "moradia", "credit_card", 2, datetime.date(2024, 12, 25))
        self.assertEqual([r.month for r in records], [datetime.date(2024, 12, 1), datetime.date(2025, 1, 1)])

    def test_each_call_gets_a_new_group(self):
        a = installments.generate(10.0, "A", "outros", "pix", 2, datetime.date(2024, 1, 1))
        b = installments.generate(10.0, "A", "outros", "pix", 2, datetime.date(2024, 1, 1))
        self.assertNotEqual(a[0].installment_group, b[0].installment_group)

    def test_description_is_stripped(self):
        records = installments.generate(10.0, "  Pizza  ", "alimentacao", "pix", 2, datetime.date(2024, 1, 1))
        self.assertEqual(records[0].description, "Pizza (1/2)")


class TestValidateExpense(unittest.TestCase):
    def assertFieldFails(self, field, **overrides):
        kwargs = dict(total=100.0, description="Compra", category="outros",
                      payment_method="pix", installment_count=1)
        kwargs.update(overrides)
        with self.assertRaises(ValidationError) as ctx:
            installments.validate_expense(**kwargs)
        self.assertEqual(ctx.exception.field, field)

    def test_valid_input_passes(self):
        installments.validate_expense(100.0, "Compra", "outros", "pix", 12)

    def test_empty_description(self):
        self.assertFieldFails("description", description="")
        self.assertFieldFails("description", description="   ")
        self.assertFieldFails("description", description=None)

    def test_non_positive_total(self):
        self.assertFieldFails("value", total=0)
        self.assertFieldFails("value", total=-10.0)
        self.assertFieldFails("value", total=None)

    def test_missing_or_unknown_category(self):
        self.assertFieldFails("category", category="")
        self.assertFieldFails("category", category="viagens")

    def test_unknown_payment_method(self):
        self.assertFieldFails("payment_method", payment_method="boleto")

    def test_installment_range(self):
        self.assertFieldFails("installments", installment_count=0)
        self.assertFieldFails("installments", installment_count=13)

    def test_generate_validates(self):
        with self.assertRaises(ValidationError):
            installments.generate(0, "Compra", "outros", "pix", 1, datetime.date(2024, 1, 1))


class TestSubmitInstallments(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.mock_supabase_client = MagicMock(spec=Client)
        self.context = UserContext(user_id="user-1", month=datetime.date(2024, 1, 1))
        self.records = installments.generate(300.0, "TV", "outros", "credit_card", 3, datetime.date(2024, 1, 1))

    @patch("financeiro.core.db.insert_expense")
    async def test_all_inserts_succeed(self, mock_insert):
        mock_insert.return_value = {}
        saved = await installments.submit_installments(self.mock_supabase_client, self.context, self.records)

        self.assertEqual(saved, 3)
        self.assertEqual(mock_insert.call_count, 3)
        inserted = [call.args[1] for call in mock_insert.call_args_list]
        self.assertTrue(all(r.user_id == "user-1" for r in inserted))
        self.assertEqual({r.current_installment for r in inserted}, {1, 2, 3})

    @patch("financeiro.core.db.insert_expense")
    async def test_partial_failure_is_reported_without_rollback(self, mock_insert):
        error = PersistenceError("falhou")

        def insert(client, record):
            if record.current_installment == 2:
                raise error
            return {}

        mock_insert.side_effect = insert
        with self.assertRaises(PartialBatchError) as ctx:
            await installments.submit_installments(self.mock_supabase_client, self.context, self.records)

        self.assertIs(ctx.exception.first_error, error)
        self.assertEqual(ctx.exception.succeeded, 2)
        self.assertEqual(ctx.exception.total, 3)
        # todas as parcelas foram tentadas
        self.assertEqual(mock_insert.call_count, 3)
        self.mock_supabase_client.table.return_value.delete.assert_not_called()

    @patch("financeiro.core.db.insert_expense")
    async def test_total_failure_raises_persistence_error(self, mock_insert):
        mock_insert.side_effect = PersistenceError("sem conexão")
        with self.assertRaises(PersistenceError) as ctx:
            await installments.submit_installments(self.mock_supabase_client, self.context, self.records)
        self.assertNotIsInstance(ctx.exception, PartialBatchError)

    @patch("financeiro.core.db.insert_expenses")
    @patch("financeiro.core.db.insert_expense")
    async def test_batch_mode_sends_one_request(self, mock_insert, mock_insert_batch):
        saved = await installments.submit_installments(
            self.mock_supabase_client, self.context, self.records, mode="batch"
        )
        self.assertEqual(saved, 3)
        mock_insert.assert_not_called()
        mock_insert_batch.assert_called_once_with(self.mock_supabase_client, self.records)
