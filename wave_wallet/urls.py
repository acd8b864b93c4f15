"""URL routing for the wallet API.


The /api/ namespace exposes the wallet operations, balance, QR and history views
consumed by the mobile front end.
"""

from django.contrib import admin
from django.urls import path, include


urlpatterns = [
	path("admin/", admin.site.urls),
	path("api/", include("api.urls")),
]
