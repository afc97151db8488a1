import unittest

from financeiro.utils.text_utils import format_brl, parse_amount, parse_int


class TestTextUtils(unittest.TestCase):
    def test_parse_amount_plain(self):
        self.assertEqual(parse_amount("1200"), 1200.0)
        self.assertEqual(parse_amount("1200.50"), 1200.5)

    def test_parse_amount_brazilian_format(self):
        self.assertEqual(parse_amount("1200,50"), 1200.5)
        self.assertEqual(parse_amount("1.200,50"), 1200.5)
        self.assertEqual(parse_amount("R$ 35,90"), 35.9)

    def test_parse_amount_thousands_without_cents(self):
        self.assertEqual(parse_amount("1.200"), 1200.0)
        self.assertEqual(parse_amount("2.400"), 2400.0)
        self.assertEqual(parse_amount("1.200.000"), 1200000.0)
        self.assertEqual(parse_amount("R$ 2.400"), 2400.0)

    def test_parse_amount_dot_as_decimal(self):
        self.assertEqual(parse_amount("12.50"), 12.5)
        self.assertEqual(parse_amount("1.5"), 1.5)

    def test_parse_amount_malformed_groups(self):
        self.assertIsNone(parse_amount("1.20.300"))
        self.assertIsNone(parse_amount("1.2.3"))

    def test_parse_amount_empty_or_invalid(self):
        self.assertIsNone(parse_amount(""))
        self.assertIsNone(parse_amount("   "))
        self.assertIsNone(parse_amount(None))
        self.assertIsNone(parse_amount("abc"))

    def test_parse_amount_numbers_pass_through(self):
        self.assertEqual(parse_amount(10), 10.0)

    def test_parse_int(self):
        self.assertEqual(parse_int("3"), 3)
        self.assertEqual(parse_int("", default=1), 1)
        self.assertEqual(parse_int("três", default=1), 1)
        self.assertIsNone(parse_int(None))

    def test_format_brl(self):
        self.assertEqual(format_brl(1234.5), "R$ 1.234,50")
        self.assertEqual(format_brl(0), "R$ 0,00")
        self.assertEqual(format_brl(None), "R$ 0,00")
