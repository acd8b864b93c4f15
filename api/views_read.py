"""Read-side endpoints: balance (with masking), QR payload, history pages."""

from django.http import HttpResponse, JsonResponse, HttpResponseBadRequest

from core.formatting import format_balance
from core.qr import render_svg
from core.services import WalletServices, recipient_search
from .presenter import (
	get_refresher, is_balance_visible, load_browser, page_to_dict, save_browser, toggle_balance_visibility,
)


def balance(request):
	"""
	GET: Current balance, plus its display string ("********" when masked)
	"""
	services = WalletServices()
	visible = is_balance_visible(request)
	return JsonResponse({
		"balance": f"{services.balance:.2f}",
		"display": format_balance(services.balance, visible),
		"visible": visible,
	})


def balance_visibility(request):
	"""
	POST: Show/hide the balance (the eye icon)
	"""
	if request.method != "POST":
		return HttpResponseBadRequest("POST only")
	visible = toggle_balance_visibility(request)
	services = WalletServices()
	return JsonResponse({"visible": visible, "display": format_balance(services.balance, visible)})


def _current_payload() -> str:
	refresher = get_refresher()
	if not refresher.active:
		refresher.start(WalletServices().balance)
	return refresher.payload


def qr(request):
	"""
	GET: The QR payload currently shown; starts the refresh cycle on first call
	"""
	refresher = get_refresher()
	payload = _current_payload()
	return JsonResponse({"payload": payload, "refresh_seconds": refresher.interval})


def qr_svg(request):
	"""
	GET: The same payload rendered as an SVG QR code
	"""
	return HttpResponse(render_svg(_current_payload()), content_type="image/svg+xml")


def _int_param(request, name, default):
	raw = request.GET.get(name)
	if raw in (None, ""):
		return default
	try:
		return int(raw)
	except ValueError:
		return None


def history(request):
	"""
	GET: One page of history at ?offset= (default 0), optionally filtered by ?search=
	"""
	offset = _int_param(request, "offset", 0)
	page_size = _int_param(request, "page_size", None)
	if offset is None or offset < 0:
		return HttpResponseBadRequest("offset must be a non-negative integer")
	if request.GET.get("page_size") and (page_size is None or page_size < 1):
		return HttpResponseBadRequest("page_size must be a positive integer")

	services = WalletServices()
	page = services.history.page(offset, page_size, recipient_search(request.GET.get("search")))
	return JsonResponse(page_to_dict(page))


def history_more(request):
	"""
	GET: Next page for this session ("Voir plus"). Changing ?search= or making an
	operation starts over from the most recent entry.
	"""
	services = WalletServices()
	browser = load_browser(request, services.history)
	page = browser.load_more(request.GET.get("search", ""))
	save_browser(request, browser)
	return JsonResponse(page_to_dict(page))
