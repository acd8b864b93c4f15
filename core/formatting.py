"""French display helpers for balances and history items."""

from decimal import Decimal

from django.utils import numberformat

from .records import TransactionKind, TransactionRecord

MASK = "********"
# fr-FR groups thousands with a narrow no-break space
GROUP_SEPARATOR = "\u202f"

EMPTY_MESSAGES = {
	"no_history": "Aucune opération effectuée.",
	"no_match": "Aucun transfert trouvé pour cette recherche.",
}

KIND_CSS = {
	TransactionKind.DEPOSIT: "deposit",
	TransactionKind.WITHDRAWAL: "withdrawal",
	TransactionKind.TRANSFER: "transfer",
}


def format_amount(value) -> str:
	"""
	5000 -> "5 000", 10.5 -> "10,5", 1234.56 -> "1 234,56"
	"""
	amount = Decimal(value).quantize(Decimal("0.01"))
	if amount == 0:
		amount = abs(amount)
	text = numberformat.format(
		amount, ",", decimal_pos=2, grouping=3, thousand_sep=GROUP_SEPARATOR, force_grouping=True,
	)
	integer, _, fraction = text.partition(",")
	fraction = fraction.rstrip("0")
	return f"{integer},{fraction}" if fraction else integer


def format_balance(balance, visible: bool = True) -> str:
	if not visible:
		return MASK
	return f"{format_amount(balance)} FCFA"


def record_label(record: TransactionRecord) -> str:
	if record.kind == TransactionKind.TRANSFER:
		return f"À {record.recipient_name or 'un destinataire inconnu'}"
	return record.kind.value


def describe_record(record: TransactionRecord) -> dict:
	"""
	View of one history line: label, signed amount, CSS class and date
	"""
	sign = "+" if record.kind == TransactionKind.DEPOSIT else "-"
	return {
		"label": record_label(record),
		"amount_display": f"{sign}{format_amount(record.amount)}F",
		"css_class": KIND_CSS[record.kind],
		"date": record.formatted_date,
	}


def empty_state_message(reason: str | None) -> str | None:
	if reason is None:
		return None
	return EMPTY_MESSAGES[reason]
