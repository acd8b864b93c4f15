"""Transaction records and their storage encoding.

A record is created once an operation has been validated and applied, and is
never edited afterwards. The history is stored as one JSON array, newest first,
using the field names of the browser version so its saved data stays readable.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation

from django.db import models
from django.utils import dateformat, timezone, translation

from .constants import CENT, to_money
from .errors import StorageCorrupted, WalletError

ZERO = Decimal("0.00")

# Display formats written by older clients, tried in order when "horodatage" is absent
LEGACY_DATE_FORMATS = ("%B %d, %Y, %I:%M %p", "%B %d, %Y at %I:%M %p")


class TransactionKind(models.TextChoices):
	DEPOSIT = "Dépôt", "Deposit"
	WITHDRAWAL = "Retrait", "Withdrawal"
	TRANSFER = "Transfert", "Transfer"


def format_timestamp(dt: datetime) -> str:
	"""
	English long date with a 12-hour clock, e.g. "October 19, 2026, 3:05 PM"
	"""
	local = timezone.localtime(dt) if timezone.is_aware(dt) else dt
	with translation.override("en"):
		return dateformat.format(local, "F j, Y, g:i A")


def _parse_legacy_date(text: str) -> datetime:
	for fmt in LEGACY_DATE_FORMATS:
		try:
			parsed = datetime.strptime(text, fmt)
		except ValueError:
			continue
		return timezone.make_aware(parsed)
	raise StorageCorrupted(f"unreadable date: {text!r}")


@dataclass(frozen=True)
class TransactionRecord:
	"""
	One completed wallet operation. `fee` is kept apart from `amount`.
	"""
	kind: TransactionKind
	amount: Decimal
	fee: Decimal = ZERO
	recipient_first_name: str = ""
	recipient_last_name: str = ""
	timestamp: datetime = field(default_factory=timezone.now)

	def __post_init__(self):
		if self.amount <= 0:
			raise ValueError(f"record amount must be > 0, got {self.amount}")
		if self.fee < 0:
			raise ValueError(f"record fee must be >= 0, got {self.fee}")
		if self.kind != TransactionKind.TRANSFER and self.fee != 0:
			raise ValueError(f"only transfers carry a fee ({self.kind})")

	@classmethod
	def deposit(cls, amount: Decimal, **kwargs) -> "TransactionRecord":
		return cls(kind=TransactionKind.DEPOSIT, amount=amount, **kwargs)

	@classmethod
	def withdrawal(cls, amount: Decimal, **kwargs) -> "TransactionRecord":
		return cls(kind=TransactionKind.WITHDRAWAL, amount=amount, **kwargs)

	@classmethod
	def transfer(cls, amount: Decimal, fee: Decimal, first_name: str, last_name: str, **kwargs) -> "TransactionRecord":
		return cls(
			kind=TransactionKind.TRANSFER,
			amount=amount,
			fee=fee,
			recipient_first_name=first_name,
			recipient_last_name=last_name,
			**kwargs,
		)

	@property
	def total(self) -> Decimal:
		return self.amount + self.fee

	@property
	def recipient_name(self) -> str:
		# Last name first, the way the history list labels transfers
		return f"{self.recipient_last_name} {self.recipient_first_name}".strip()

	@property
	def formatted_date(self) -> str:
		return format_timestamp(self.timestamp)

	def to_dict(self) -> dict:
		return {
			"type": self.kind.value,
			"montant": f"{self.amount:.2f}",
			"frais": f"{self.fee:.2f}",
			"destinataireNom": self.recipient_last_name,
			"destinatairePrenom": self.recipient_first_name,
			"date": self.formatted_date,
			"horodatage": self.timestamp.isoformat(),
		}

	@classmethod
	def from_dict(cls, data: dict) -> "TransactionRecord":
		"""
		Accepts both current entries and legacy ones (float amounts, no "horodatage")
		"""
		try:
			kind = TransactionKind(data["type"])
			amount = to_money(data["montant"])
			fee = to_money(data.get("frais") or 0)
		except (KeyError, TypeError, ValueError, InvalidOperation, WalletError) as e:
			raise StorageCorrupted(f"bad history entry {data!r}: {e}") from e

		stamp = data.get("horodatage")
		if stamp:
			try:
				timestamp = datetime.fromisoformat(stamp)
			except (TypeError, ValueError) as e:
				raise StorageCorrupted(f"bad timestamp {stamp!r}") from e
		else:
			timestamp = _parse_legacy_date(data.get("date") or "")

		try:
			return cls(
				kind=kind,
				amount=amount,
				fee=fee.quantize(CENT),
				recipient_first_name=data.get("destinatairePrenom") or "",
				recipient_last_name=data.get("destinataireNom") or "",
				timestamp=timestamp,
			)
		except ValueError as e:
			raise StorageCorrupted(f"bad history entry {data!r}: {e}") from e


def encode_history(records) -> str:
	return json.dumps([r.to_dict() for r in records], ensure_ascii=False)


def decode_history(text: str | None) -> list:
	"""
	Missing or empty storage means no history; anything else must be a JSON array
	"""
	if not text:
		return []
	try:
		data = json.loads(text)
	except json.JSONDecodeError as e:
		raise StorageCorrupted(f"history is not valid JSON: {e}") from e
	if data is None:
		return []
	if not isinstance(data, list):
		raise StorageCorrupted("history must be a JSON array")
	return [TransactionRecord.from_dict(item) for item in data]
