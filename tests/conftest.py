"""Shared fixtures: in-memory storage, fake timers, a frozen QR refresher."""

from decimal import Decimal

import pytest

from api import presenter
from core.adapters.storage_adapter import MemoryStorage
from core.qr import QRCodeRefresher
from core.services import HistoryStore, Ledger, WalletServices


class FakeTimer:
	"""Stands in for threading.Timer; fire() runs the callback by hand."""

	created = []

	def __init__(self, interval, function, args=None, kwargs=None):
		self.interval = interval
		self.function = function
		self.args = args or ()
		self.kwargs = kwargs or {}
		self.started = False
		self.cancelled = False
		self.daemon = False
		FakeTimer.created.append(self)

	def start(self):
		self.started = True

	def cancel(self):
		self.cancelled = True

	def fire(self):
		self.function(*self.args, **self.kwargs)


@pytest.fixture
def fake_timers():
	FakeTimer.created = []
	yield FakeTimer.created


@pytest.fixture
def clock():
	now = {"t": 1_760_886_300.0}

	def tick():
		return now["t"]

	tick.now = now
	return tick


@pytest.fixture
def storage():
	return MemoryStorage()


@pytest.fixture
def history(storage):
	return HistoryStore(storage, page_size=3)


@pytest.fixture
def ledger(storage, history):
	return Ledger(storage, history, fee_rate=Decimal("0.01"), default_balance=Decimal("120000"))


@pytest.fixture
def services(storage):
	return WalletServices(storage, fee_rate=Decimal("0.01"), page_size=3, default_balance=Decimal("120000"))


@pytest.fixture(autouse=True)
def qr_refresher(fake_timers, clock):
	"""Every test gets a refresher that never spawns a real thread."""
	refresher = QRCodeRefresher(user_id="USER123", interval=30, clock=clock, timer_factory=FakeTimer)
	presenter.set_refresher(refresher)
	yield refresher
	presenter.set_refresher(None)
