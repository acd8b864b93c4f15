"""QR payload describing the balance, and its periodic refresh.

The payload embeds a millisecond timestamp, so it changes on every refresh even
when the balance does not. Rendering goes through the `qrcode` library (SVG
output, no Pillow needed).
"""

import io
import logging
import threading
import time
from decimal import Decimal

import qrcode
from qrcode.image.svg import SvgPathImage

from .constants import QR_PREFIX, QR_REFRESH_SECONDS, WALLET_USER_ID

logger = logging.getLogger(__name__)


def build_payload(balance: Decimal, user_id: str = WALLET_USER_ID, now_ms: int | None = None) -> str:
	"""
	e.g. "WaveWeb|Solde:125000.00|ID:USER123|1760886300000"
	"""
	if now_ms is None:
		now_ms = int(time.time() * 1000)
	return f"{QR_PREFIX}|Solde:{Decimal(balance):.2f}|ID:{user_id}|{now_ms}"


def render_svg(payload: str) -> str:
	qr = qrcode.QRCode(
		version=None,
		error_correction=qrcode.constants.ERROR_CORRECT_H,
		box_size=10,
		border=2,
	)
	qr.add_data(payload)
	qr.make(fit=True)
	img = qr.make_image(image_factory=SvgPathImage)
	buf = io.BytesIO()
	img.save(buf)
	return buf.getvalue().decode("utf-8")


class QRCodeRefresher:
	"""
	Regenerates the payload every `interval` seconds from the last known balance.

	start() cancels whatever timer is running before scheduling a new one, so
	at most one timer is ever live. A tick from a cancelled timer is ignored.
	"""

	def __init__(self, user_id: str = WALLET_USER_ID, interval: float = QR_REFRESH_SECONDS, *, clock=time.time, timer_factory=threading.Timer):
		self.user_id = user_id
		self.interval = interval
		self.clock = clock
		self.timer_factory = timer_factory
		self.payload: str | None = None
		self.refresh_count = 0
		self._balance = Decimal("0")
		self._timer = None
		self._generation = 0
		self._lock = threading.Lock()

	@property
	def active(self) -> bool:
		return self._timer is not None

	def start(self, balance: Decimal) -> str:
		"""
		(Re)start the cycle: cancel the current timer, refresh now, schedule the next tick
		"""
		with self._lock:
			self._cancel()
			self._balance = Decimal(balance)
			self._refresh()
			self._schedule()
			return self.payload

	def stop(self) -> None:
		with self._lock:
			self._cancel()

	def _cancel(self):
		if self._timer is not None:
			self._timer.cancel()
			self._timer = None
		self._generation += 1

	def _schedule(self):
		generation = self._generation
		timer = self.timer_factory(self.interval, self._tick, args=(generation,))
		timer.daemon = True
		self._timer = timer
		timer.start()

	def _refresh(self):
		self.payload = build_payload(self._balance, self.user_id, int(self.clock() * 1000))
		self.refresh_count += 1
		logger.debug("QR payload refreshed: %s", self.payload)

	def _tick(self, generation: int):
		with self._lock:
			if generation != self._generation:
				return
			self._refresh()
			self._schedule()
