"""Tests for the QR payload and its refresh cycle (fake timers, no threads)."""

from decimal import Decimal

from core.qr import build_payload, render_svg


class TestPayload:

	def test_payload_format(self):
		assert build_payload(Decimal("125000"), "USER123", 1760886300000) == "WaveWeb|Solde:125000.00|ID:USER123|1760886300000"

	def test_svg_render(self):
		svg = render_svg("WaveWeb|Solde:1.00|ID:USER123|1")
		assert svg.lstrip().startswith("<?xml") or "<svg" in svg
		assert "path" in svg


class TestRefresher:

	def test_start_refreshes_immediately_and_schedules_one_timer(self, qr_refresher, fake_timers):
		payload = qr_refresher.start(Decimal("100"))

		assert payload == "WaveWeb|Solde:100.00|ID:USER123|1760886300000"
		assert qr_refresher.active
		assert len(fake_timers) == 1
		assert fake_timers[0].started and fake_timers[0].interval == 30
		assert fake_timers[0].daemon

	def test_restart_cancels_previous_timer(self, qr_refresher, fake_timers):
		qr_refresher.start(Decimal("100"))
		qr_refresher.start(Decimal("90"))

		live = [t for t in fake_timers if not t.cancelled]
		assert len(live) == 1
		assert fake_timers[0].cancelled
		assert "Solde:90.00" in qr_refresher.payload

	def test_tick_regenerates_with_new_timestamp(self, qr_refresher, fake_timers, clock):
		qr_refresher.start(Decimal("100"))
		clock.now["t"] += 30
		fake_timers[-1].fire()

		assert qr_refresher.payload.endswith("|1760886330000")
		assert qr_refresher.refresh_count == 2
		# each tick schedules the next one
		assert len(fake_timers) == 2

	def test_stale_tick_is_ignored(self, qr_refresher, fake_timers):
		qr_refresher.start(Decimal("100"))
		stale = fake_timers[0]
		qr_refresher.start(Decimal("50"))
		count = qr_refresher.refresh_count

		stale.fire()

		assert qr_refresher.refresh_count == count
		assert len(fake_timers) == 2

	def test_stop(self, qr_refresher, fake_timers):
		qr_refresher.start(Decimal("100"))
		qr_refresher.stop()
		assert not qr_refresher.active
		assert fake_timers[0].cancelled
