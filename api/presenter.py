"""Presentation-side state shared by the views.

- one QRCodeRefresher per process, started lazily on first use
- per-session UI state: balance masking flag and the history "load more" cursor
- JSON shaping for pages and results
"""

import json
import threading

from core.constants import QR_REFRESH_SECONDS, WALLET_USER_ID
from core.formatting import describe_record, empty_state_message
from core.qr import QRCodeRefresher
from core.services import HistoryBrowser, HistoryStore, Page

VISIBLE_KEY = "balance_visible"
CURSOR_KEY = "history_cursor"

_refresher = None
_refresher_lock = threading.Lock()


def get_refresher() -> QRCodeRefresher:
	global _refresher
	with _refresher_lock:
		if _refresher is None:
			_refresher = QRCodeRefresher(user_id=WALLET_USER_ID, interval=QR_REFRESH_SECONDS)
		return _refresher


def set_refresher(refresher: QRCodeRefresher | None) -> None:
	"""
	Swap the process refresher (stopping the old one); used by tests
	"""
	global _refresher
	with _refresher_lock:
		if _refresher is not None:
			_refresher.stop()
		_refresher = refresher


def read_json(request) -> dict | None:
	"""
	Parsed JSON object body, {} when empty, None when malformed
	"""
	try:
		body = json.loads(request.body or b"{}")
	except (ValueError, UnicodeDecodeError):
		return None
	return body if isinstance(body, dict) else None


def is_balance_visible(request) -> bool:
	return request.session.get(VISIBLE_KEY, True)


def toggle_balance_visibility(request) -> bool:
	visible = not is_balance_visible(request)
	request.session[VISIBLE_KEY] = visible
	return visible


def load_browser(request, store: HistoryStore) -> HistoryBrowser:
	return HistoryBrowser.from_state(store, request.session.get(CURSOR_KEY))


def save_browser(request, browser: HistoryBrowser) -> None:
	request.session[CURSOR_KEY] = browser.state()


def forget_browser(request) -> None:
	request.session.pop(CURSOR_KEY, None)


def page_to_dict(page: Page) -> dict:
	return {
		"items": [{**r.to_dict(), **describe_record(r)} for r in page.items],
		"offset": page.offset,
		"page_size": page.page_size,
		"total": page.total,
		"history_size": page.history_size,
		"has_more": page.has_more,
		"next_offset": page.next_offset,
		"empty_reason": page.empty_reason,
		"empty_message": empty_state_message(page.empty_reason),
	}
