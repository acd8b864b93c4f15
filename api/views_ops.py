"""Operational endpoints that move the wallet forward (deposit/withdraw/transfer)."""

from django.http import JsonResponse, HttpResponseBadRequest
from django.middleware.csrf import get_token

from core.services import WalletServices
from .presenter import forget_browser, get_refresher, read_json


def health(request):
	return JsonResponse({"ok": True})


def csrf(request):
	# Forces creation/rotation of the CSRF token AND sets 'csrftoken' cookie
	return JsonResponse({"csrftoken": get_token(request)})


def _respond(request, result):
	"""
	200 with the new state on success; 400 with error code + message otherwise.
	A success restarts the QR cycle and sends the history list back to page one.
	"""
	if not result.ok:
		return JsonResponse(result.as_dict(), status=400)
	get_refresher().start(result.balance)
	forget_browser(request)
	return JsonResponse(result.as_dict())


def deposit(request):
	"""
	POST: Credit the wallet by "amount"
	"""
	if request.method != "POST":
		return HttpResponseBadRequest("POST only")
	body = read_json(request)
	if body is None:
		return HttpResponseBadRequest("Invalid JSON")
	return _respond(request, WalletServices().deposit(body.get("amount")))


def withdraw(request):
	"""
	POST: Debit "amount" if the balance covers it
	"""
	if request.method != "POST":
		return HttpResponseBadRequest("POST only")
	body = read_json(request)
	if body is None:
		return HttpResponseBadRequest("Invalid JSON")
	return _respond(request, WalletServices().withdraw(body.get("amount")))


def transfer(request):
	"""
	POST: Send "amount" to "first_name"/"last_name"; the 1% fee is debited on top
	"""
	if request.method != "POST":
		return HttpResponseBadRequest("POST only")
	body = read_json(request)
	if body is None:
		return HttpResponseBadRequest("Invalid JSON")
	first_name = body.get("first_name") or ""
	last_name = body.get("last_name") or ""
	if not isinstance(first_name, str) or not isinstance(last_name, str):
		return HttpResponseBadRequest("first_name and last_name must be strings")
	result = WalletServices().transfer(body.get("amount"), first_name, last_name)
	return _respond(request, result)


def transfer_quote(request):
	"""
	POST: Fee and total for the amount being typed (no state change)
	"""
	if request.method != "POST":
		return HttpResponseBadRequest("POST only")
	body = read_json(request)
	if body is None:
		return HttpResponseBadRequest("Invalid JSON")
	quote = WalletServices().quote_transfer(body.get("amount"))
	return JsonResponse({
		"amount": f"{quote.amount:.2f}",
		"fee": f"{quote.fee:.2f}",
		"total": f"{quote.total:.2f}",
	})
