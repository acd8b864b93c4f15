from decimal import Decimal

import pytest

from core.formatting import describe_record, empty_state_message, format_amount, format_balance
from core.records import TransactionRecord

NNBSP = "\u202f"


class TestFormatting:

	@pytest.mark.parametrize("value, expected", [
		(Decimal("0"), "0"),
		(Decimal("999"), "999"),
		(Decimal("5000"), f"5{NNBSP}000"),
		(Decimal("120990.00"), f"120{NNBSP}990"),
		(Decimal("10.5"), "10,5"),
		(Decimal("1234567.89"), f"1{NNBSP}234{NNBSP}567,89"),
		(Decimal("-3000"), f"-3{NNBSP}000"),
		(Decimal("-0.001"), "0"),
		(10.5, "10,5"),
	])
	def test_format_amount(self, value, expected):
		assert format_amount(value) == expected

	def test_balance_masking(self):
		assert format_balance(Decimal("120000")) == f"120{NNBSP}000 FCFA"
		assert format_balance(Decimal("120000"), visible=False) == "********"

	def test_describe_deposit(self):
		view = describe_record(TransactionRecord.deposit(Decimal("5000")))
		assert view["label"] == "Dépôt"
		assert view["amount_display"] == f"+5{NNBSP}000F"
		assert view["css_class"] == "deposit"

	def test_describe_withdrawal(self):
		view = describe_record(TransactionRecord.withdrawal(Decimal("3000")))
		assert (view["label"], view["amount_display"], view["css_class"]) == ("Retrait", f"-3{NNBSP}000F", "withdrawal")

	def test_describe_transfer(self):
		view = describe_record(TransactionRecord.transfer(Decimal("1000"), Decimal("10"), "Jean", "Dupont"))
		assert view["label"] == "À Dupont Jean"
		assert view["amount_display"] == f"-1{NNBSP}000F"
		assert view["css_class"] == "transfer"

	def test_empty_state_messages(self):
		assert empty_state_message(None) is None
		assert empty_state_message("no_history") == "Aucune opération effectuée."
		assert empty_state_message("no_match") == "Aucun transfert trouvé pour cette recherche."
