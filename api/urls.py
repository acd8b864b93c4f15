"""Public API surface for the wallet front end.

- /deposit, /withdraw, /transfer: balance-changing operations
- /transfer/quote: live fee preview
- /balance, /balance/visibility: balance display and masking
- /qr, /qr.svg: refreshing QR payload
- /history, /history/more: paginated, searchable operation history
"""

from django.urls import path
from .views_ops import health, csrf, deposit, withdraw, transfer, transfer_quote
from .views_read import balance, balance_visibility, qr, qr_svg, history, history_more


urlpatterns = [
	path("health", health),
	path("csrf", csrf),
	path("deposit", deposit),
	path("withdraw", withdraw),
	path("transfer", transfer),
	path("transfer/quote", transfer_quote),
	path("balance", balance),
	path("balance/visibility", balance_visibility),
	path("qr", qr),
	path("qr.svg", qr_svg),
	path("history", history),
	path("history/more", history_more),
]
