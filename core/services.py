"""Business orchestration for the wallet.

This module coordinates: validate -> mutate balance -> append history, for
deposits, withdrawals and transfers, plus the paginated history views.
Each mutation runs inside storage.atomic() so the balance and the history
are written together.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal

from .adapters.storage_adapter import KeyValueStorage, get_storage
from .constants import (
	BALANCE_KEY, DEFAULT_BALANCE, FEE_RATE, HISTORY_KEY, MAX_AMOUNT, PAGE_SIZE, compute_fee, to_money,
)
from .errors import InsufficientFunds, InvalidAmount, MissingRecipient, WalletError
from .formatting import format_amount
from .records import TransactionKind, TransactionRecord, decode_history, encode_history

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


# --- History -----------------------------------------------------------------

@dataclass(frozen=True)
class Page:
	"""
	A slice of the (optionally filtered) history, newest first
	"""
	items: list
	offset: int
	page_size: int
	total: int  # length of the filtered sequence
	history_size: int  # length of the whole history
	filtered: bool = False

	@property
	def has_more(self) -> bool:
		return self.offset + self.page_size < self.total

	@property
	def next_offset(self) -> int:
		return self.offset + len(self.items)

	@property
	def empty_reason(self) -> str | None:
		"""
		None when something matched; otherwise "no_match" under a search,
		"no_history" when nothing was ever recorded
		"""
		if self.total:
			return None
		return "no_match" if self.filtered else "no_history"


def recipient_search(term: str | None):
	"""
	Predicate matching transfers whose recipient first or last name contains `term`.
	A blank term means no filter (returns None).
	"""
	needle = (term or "").strip().casefold()
	if not needle:
		return None

	def matches(record: TransactionRecord) -> bool:
		return record.kind == TransactionKind.TRANSFER and (
			needle in record.recipient_first_name.casefold()
			or needle in record.recipient_last_name.casefold()
		)

	return matches


class HistoryStore:
	"""
	Append-only, newest-first operation log persisted under HISTORY_KEY
	"""

	def __init__(self, storage: KeyValueStorage, page_size: int | None = None):
		self.storage = storage
		self.page_size = page_size or PAGE_SIZE

	def records(self) -> list:
		return decode_history(self.storage.get(HISTORY_KEY))

	def append(self, record: TransactionRecord) -> None:
		with self.storage.atomic():
			records = decode_history(self.storage.get_for_update(HISTORY_KEY))
			records.insert(0, record)
			self.storage.set(HISTORY_KEY, encode_history(records))

	def latest(self) -> TransactionRecord | None:
		records = self.records()
		return records[0] if records else None

	def revision(self) -> int:
		# Entries are never removed, so the length identifies the last append
		return len(self.records())

	def page(self, offset: int = 0, page_size: int | None = None, predicate=None) -> Page:
		return self._page_of(self.records(), offset, page_size, predicate)

	def _page_of(self, records: list, offset: int, page_size: int | None, predicate) -> Page:
		page_size = self.page_size if page_size is None else page_size
		if offset < 0:
			raise ValueError(f"offset must be >= 0, got {offset}")
		if page_size < 1:
			raise ValueError(f"page_size must be >= 1, got {page_size}")

		selected = [r for r in records if predicate(r)] if predicate else records
		return Page(
			items=selected[offset:offset + page_size],
			offset=offset,
			page_size=page_size,
			total=len(selected),
			history_size=len(records),
			filtered=predicate is not None,
		)


class HistoryBrowser:
	"""
	"Load more" cursor over a HistoryStore.

	The offset goes back to 0 whenever the search term changes or a record
	was appended since the previous call.
	"""

	def __init__(self, store: HistoryStore, offset: int = 0, term: str = "", revision: int | None = None):
		self.store = store
		self.offset = offset
		self.term = term
		self.revision = revision

	def load_more(self, term: str = "") -> Page:
		term = (term or "").strip()
		records = self.store.records()
		if term != self.term or len(records) != self.revision:
			self.offset = 0
			self.term = term
			self.revision = len(records)

		page = self.store._page_of(records, self.offset, None, recipient_search(term))
		self.offset = page.next_offset
		return page

	def reset(self) -> None:
		self.offset = 0
		self.term = ""
		self.revision = None

	def state(self) -> dict:
		return {"offset": self.offset, "term": self.term, "revision": self.revision}

	@classmethod
	def from_state(cls, store: HistoryStore, state: dict | None) -> "HistoryBrowser":
		state = state or {}
		return cls(
			store,
			offset=int(state.get("offset", 0)),
			term=state.get("term", ""),
			revision=state.get("revision"),
		)


# --- Ledger ------------------------------------------------------------------

@dataclass(frozen=True)
class TransferQuote:
	amount: Decimal
	fee: Decimal
	total: Decimal


class Ledger:
	"""
	Owns the balance and applies deposit / withdraw / transfer.

	Every rule is checked before anything is written: a rejected operation
	raises a WalletError and leaves balance and history untouched.
	"""

	def __init__(self, storage: KeyValueStorage, history: HistoryStore, *, fee_rate=None, default_balance=None):
		self.storage = storage
		self.history = history
		self.fee_rate = Decimal(str(fee_rate)) if fee_rate is not None else FEE_RATE
		self.default_balance = to_money(default_balance if default_balance is not None else DEFAULT_BALANCE)

	@property
	def balance(self) -> Decimal:
		# Always read from storage; another ledger may share it
		return self._load_balance()

	def _load_balance(self, for_update: bool = False) -> Decimal:
		read = self.storage.get_for_update if for_update else self.storage.get
		raw = read(BALANCE_KEY)
		if raw is None or not str(raw).strip():
			return self.default_balance
		try:
			amount = to_money(raw)
		except InvalidAmount:
			logger.warning("Stored balance %r is not a number; using default %s", raw, self.default_balance)
			return self.default_balance
		if amount < 0:
			logger.warning("Stored balance %s is negative; using default %s", amount, self.default_balance)
			return self.default_balance
		return amount

	@staticmethod
	def _positive(amount, message: str) -> Decimal:
		"""
		Parse and require > 0 once rounded to the cent
		"""
		try:
			value = to_money(amount)
		except InvalidAmount:
			raise InvalidAmount(message)
		if value <= 0:
			raise InvalidAmount(message)
		return value

	def _apply(self, build) -> tuple:
		"""
		Re-read the balance under lock, let `build(current)` check it and return
		(new_balance, record), then write both in one storage transaction.
		"""
		with self.storage.atomic():
			current = self._load_balance(for_update=True)
			new_balance, record = build(current)
			self.storage.set(BALANCE_KEY, f"{new_balance:.2f}")
			self.history.append(record)
		return new_balance, record

	def deposit(self, amount) -> Decimal:
		"""
		Credit `amount`; returns the new balance
		"""
		amount = self._positive(amount, "Veuillez saisir un montant de dépôt valide.")

		def build(current):
			if current + amount > MAX_AMOUNT:
				raise InvalidAmount("Veuillez saisir un montant de dépôt valide.")
			return current + amount, TransactionRecord.deposit(amount)

		balance, _ = self._apply(build)
		logger.info("Deposit %s -> balance %s", amount, balance)
		return balance

	def withdraw(self, amount) -> Decimal:
		"""
		Debit `amount` if the balance covers it; returns the new balance
		"""
		amount = self._positive(amount, "Veuillez saisir un montant de retrait valide.")

		def build(current):
			if current < amount:
				raise InsufficientFunds()
			return current - amount, TransactionRecord.withdrawal(amount)

		balance, _ = self._apply(build)
		logger.info("Withdrawal %s -> balance %s", amount, balance)
		return balance

	def transfer(self, amount, recipient_first_name: str = "", recipient_last_name: str = "") -> Decimal:
		"""
		Send `amount` to a recipient; the fee is debited on top of it.

		Checks, in order: amount, recipient name, funds for amount + fee.
		"""
		amount = self._positive(amount, "Veuillez saisir un montant de transfert valide.")
		first_name = (recipient_first_name or "").strip()
		last_name = (recipient_last_name or "").strip()
		if not first_name and not last_name:
			raise MissingRecipient()

		fee = compute_fee(amount, self.fee_rate)
		total = amount + fee

		def build(current):
			if current < total:
				raise InsufficientFunds()
			return current - total, TransactionRecord.transfer(amount, fee, first_name, last_name)

		balance, record = self._apply(build)
		logger.info("Transfer %s (+%s fee) to %s -> balance %s", amount, fee, record.recipient_name, balance)
		return balance

	def quote_transfer(self, amount) -> TransferQuote:
		"""
		Fee and total for a prospective transfer; zeros when the amount is not valid
		"""
		try:
			value = self._positive(amount, "")
		except InvalidAmount:
			return TransferQuote(amount=ZERO, fee=ZERO, total=ZERO)
		fee = compute_fee(value, self.fee_rate)
		return TransferQuote(amount=value, fee=fee, total=value + fee)


# --- Service facade ----------------------------------------------------------

@dataclass
class OperationResult:
	"""
	Outcome of one wallet operation as seen by the presentation layer
	"""
	ok: bool
	operation: str
	balance: Decimal
	record: TransactionRecord | None = None
	error: str | None = None
	message: str = ""

	def as_dict(self) -> dict:
		return {
			"ok": self.ok,
			"operation": self.operation,
			"balance": f"{self.balance:.2f}",
			"record": self.record.to_dict() if self.record else None,
			"error": self.error,
			"message": self.message,
		}


def success_message(record: TransactionRecord, balance: Decimal) -> str:
	solde = f"Solde actuel: {format_amount(balance)} FCFA."
	if record.kind == TransactionKind.DEPOSIT:
		return f"Dépôt de {format_amount(record.amount)} FCFA effectué avec succès. {solde}"
	if record.kind == TransactionKind.WITHDRAWAL:
		return f"Retrait de {format_amount(record.amount)} FCFA effectué avec succès. {solde}"
	return (
		f"Transfert de {format_amount(record.amount)} FCFA vers {record.recipient_name} "
		f"(Frais: {format_amount(record.fee)} FCFA) effectué avec succès. {solde}"
	)


class WalletServices:
	"""
	Entry point for the views: builds storage, history and ledger, and turns
	WalletErrors into failure results instead of exceptions.
	"""

	def __init__(self, storage: KeyValueStorage | None = None, *, fee_rate=None, page_size=None, default_balance=None):
		self.storage = storage if storage is not None else get_storage()
		self.history = HistoryStore(self.storage, page_size=page_size)
		self.ledger = Ledger(self.storage, self.history, fee_rate=fee_rate, default_balance=default_balance)

	@property
	def balance(self) -> Decimal:
		return self.ledger.balance

	def deposit(self, amount) -> OperationResult:
		return self._run("deposit", self.ledger.deposit, amount)

	def withdraw(self, amount) -> OperationResult:
		return self._run("withdraw", self.ledger.withdraw, amount)

	def transfer(self, amount, first_name: str = "", last_name: str = "") -> OperationResult:
		return self._run("transfer", self.ledger.transfer, amount, first_name, last_name)

	def quote_transfer(self, amount) -> TransferQuote:
		return self.ledger.quote_transfer(amount)

	def _run(self, operation: str, action, *args) -> OperationResult:
		try:
			balance = action(*args)
		except WalletError as e:
			logger.info("%s rejected (%s); balance stays %s", operation, e.code, self.ledger.balance)
			return OperationResult(
				ok=False,
				operation=operation,
				balance=self.ledger.balance,
				error=e.code,
				message=e.message,
			)
		record = self.history.latest()
		return OperationResult(
			ok=True,
			operation=operation,
			balance=balance,
			record=record,
			message=success_message(record, balance),
		)
