"""Database models.


Tables:
- KeyValueEntry: string key -> text value, the server-side stand-in for the
  browser's localStorage. The wallet uses two keys ("solde", "historique").
"""

from django.db import models


class KeyValueEntry(models.Model):
	"""
	One persisted key. Values are opaque strings; the services own their format.
	"""
	key = models.CharField(max_length=100, unique=True)
	value = models.TextField(blank=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		verbose_name_plural = "key-value entries"

	def __str__(self):
		return self.key
