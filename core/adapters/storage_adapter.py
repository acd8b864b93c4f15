"""Key-value storage backends for the wallet state.

The browser version kept its state in localStorage. Here the Ledger and the
History Store receive one of these adapters instead, so the backend can be a
database table, the Django cache, or a plain dict in tests.
"""

import logging
from contextlib import nullcontext

from django.conf import settings
from django.core.cache import caches
from django.db import transaction

from core.models import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStorage:
	"""
	Interface: string keys, string values, synchronous writes
	"""

	def get(self, key: str) -> str | None:
		raise NotImplementedError

	def get_for_update(self, key: str) -> str | None:
		"""
		Read a value that is about to be rewritten inside atomic()
		"""
		return self.get(key)

	def set(self, key: str, value: str) -> None:
		raise NotImplementedError

	def atomic(self):
		"""
		Context manager grouping several writes; a no-op unless the backend is transactional
		"""
		return nullcontext()


class MemoryStorage(KeyValueStorage):
	"""
	Dict-backed storage for tests and scripts
	"""

	def __init__(self, initial: dict | None = None):
		self.data = dict(initial or {})

	def get(self, key):
		return self.data.get(key)

	def set(self, key, value):
		self.data[key] = str(value)


class DatabaseStorage(KeyValueStorage):
	"""
	Rows of core.KeyValueEntry; several writes can share one DB transaction
	"""

	def get(self, key):
		entry = KeyValueEntry.objects.filter(key=key).first()
		return entry.value if entry else None

	def get_for_update(self, key):
		# Row lock until the surrounding transaction ends
		entry = KeyValueEntry.objects.select_for_update().filter(key=key).first()
		return entry.value if entry else None

	def set(self, key, value):
		KeyValueEntry.objects.update_or_create(key=key, defaults={"value": str(value)})

	def atomic(self):
		return transaction.atomic()


class CacheStorage(KeyValueStorage):
	"""
	Django cache framework; entries never expire
	"""

	def __init__(self, alias: str | None = None):
		self.alias = alias or getattr(settings, "WALLET_CACHE_ALIAS", "default")

	@property
	def cache(self):
		return caches[self.alias]

	def get(self, key):
		return self.cache.get(key)

	def set(self, key, value):
		self.cache.set(key, str(value), timeout=None)


# One dict per process, so the "memory" backend survives across requests
PROCESS_MEMORY = MemoryStorage()

BACKENDS = {
	"database": DatabaseStorage,
	"cache": CacheStorage,
	"memory": lambda: PROCESS_MEMORY,
}


def get_storage(name: str | None = None) -> KeyValueStorage:
	"""
	Build the backend named by WALLET_STORAGE_BACKEND (or `name`)
	"""
	name = name or getattr(settings, "WALLET_STORAGE_BACKEND", "database")
	try:
		backend = BACKENDS[name]
	except KeyError:
		raise ValueError(f"Unknown storage backend {name!r}; expected one of {sorted(BACKENDS)}")
	logger.debug("Using %s storage backend", name)
	return backend()
