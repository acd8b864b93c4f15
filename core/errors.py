"""Wallet error kinds.

Raised by the Ledger before any mutation happens; the service layer turns them
into failure results and the views into 400 responses.
"""

from django.core.exceptions import ValidationError


class WalletError(ValidationError):
	"""
	Base class: carries a stable `code` and a human-readable `message`
	"""
	code = "wallet_error"
	default_message = "Opération impossible."

	def __init__(self, message: str | None = None):
		super().__init__(message or self.default_message, code=self.code)


class InvalidAmount(WalletError):
	code = "invalid_amount"
	default_message = "Veuillez saisir un montant valide."


class InsufficientFunds(WalletError):
	code = "insufficient_funds"
	default_message = "Montant insuffisant : votre solde ne permet pas cette opération."


class MissingRecipient(WalletError):
	code = "missing_recipient"
	default_message = "Veuillez saisir au moins le nom ou le prénom du destinataire."


class StorageCorrupted(ValueError):
	"""
	Persisted state exists but cannot be decoded
	"""
