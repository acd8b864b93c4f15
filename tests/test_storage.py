"""Tests for the key-value storage backends."""

from decimal import Decimal

import pytest
from django.core.cache import caches

from core.adapters.storage_adapter import (
	PROCESS_MEMORY, CacheStorage, DatabaseStorage, MemoryStorage, get_storage,
)
from core.constants import BALANCE_KEY
from core.models import KeyValueEntry
from core.services import HistoryStore, Ledger


class TestMemoryStorage:

	def test_get_set(self):
		storage = MemoryStorage({"a": "1"})
		storage.set("b", 2)
		assert storage.get("a") == "1"
		assert storage.get("b") == "2"
		assert storage.get("missing") is None


@pytest.mark.django_db
class TestDatabaseStorage:

	def test_set_creates_then_updates(self):
		storage = DatabaseStorage()
		assert storage.get(BALANCE_KEY) is None

		storage.set(BALANCE_KEY, "120000.00")
		storage.set(BALANCE_KEY, "125000.00")

		assert storage.get(BALANCE_KEY) == "125000.00"
		assert KeyValueEntry.objects.filter(key=BALANCE_KEY).count() == 1

	def test_failed_append_rolls_back_balance(self, monkeypatch):
		storage = DatabaseStorage()
		history = HistoryStore(storage)
		ledger = Ledger(storage, history)

		def boom(record):
			raise RuntimeError("disk full")

		monkeypatch.setattr(history, "append", boom)
		with pytest.raises(RuntimeError):
			ledger.deposit("500")

		assert storage.get(BALANCE_KEY) is None
		assert ledger.balance == Decimal("120000.00")

	def test_ledger_round_trip(self):
		ledger = Ledger(DatabaseStorage(), HistoryStore(DatabaseStorage()))
		ledger.transfer("1000", "Jean", "Dupont")

		reloaded = Ledger(DatabaseStorage(), HistoryStore(DatabaseStorage()))
		assert reloaded.balance == Decimal("118990.00")
		assert reloaded.history.latest().recipient_last_name == "Dupont"

	def test_ledgers_sharing_the_table_see_each_other(self):
		first = Ledger(DatabaseStorage(), HistoryStore(DatabaseStorage()))
		second = Ledger(DatabaseStorage(), HistoryStore(DatabaseStorage()))

		first.deposit("5000")
		second.deposit("5000")

		assert KeyValueEntry.objects.get(key=BALANCE_KEY).value == "130000.00"
		assert len(HistoryStore(DatabaseStorage()).records()) == 2

	def test_get_for_update_inside_atomic(self):
		storage = DatabaseStorage()
		storage.set(BALANCE_KEY, "10.00")
		with storage.atomic():
			assert storage.get_for_update(BALANCE_KEY) == "10.00"
			assert storage.get_for_update("missing") is None


class TestCacheStorage:

	def test_get_set(self):
		caches["default"].clear()
		storage = CacheStorage()
		storage.set("historique", "[]")
		assert storage.get("historique") == "[]"
		assert storage.get("solde") is None


class TestGetStorage:

	def test_named_backends(self):
		assert isinstance(get_storage("database"), DatabaseStorage)
		assert isinstance(get_storage("cache"), CacheStorage)
		assert get_storage("memory") is PROCESS_MEMORY

	def test_default_from_settings(self, settings):
		settings.WALLET_STORAGE_BACKEND = "cache"
		assert isinstance(get_storage(), CacheStorage)

	def test_unknown_backend(self):
		with pytest.raises(ValueError):
			get_storage("redis")
