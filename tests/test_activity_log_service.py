"""
Tests for ActivityLogService - the append-only audit trail.
"""

import pytest
from django.contrib.auth.models import AnonymousUser
from django.test import RequestFactory
from penduduk.models import ActivityLog
from penduduk.services.activity_log_service import ActivityLogService


@pytest.mark.django_db
class TestActivityLogService:
    """Test cases for writing audit entries."""

    def setup_method(self):
        self.service = ActivityLogService()
        self.factory = RequestFactory()

    def test_log_penduduk_activity(self, admin_account):
        entry = self.service.log_penduduk_activity(
            ActivityLog.ACTION_CREATE_PENDUDUK,
            "Menambahkan penduduk baru: Budi",
            42,
            {"nama": "Budi", "email": "budi@x.com"},
            user=admin_account,
        )

        entry.refresh_from_db()
        assert entry.user == admin_account
        assert entry.action == "create_penduduk"
        assert entry.subject_type == ActivityLog.SUBJECT_PENDUDUK
        assert entry.subject_id == 42
        assert entry.properties == {"nama": "Budi", "email": "budi@x.com"}
        assert entry.created_at is not None

    def test_actor_and_client_taken_from_request(self, admin_account):
        request = self.factory.post(
            "/admin/penduduk/", REMOTE_ADDR="10.0.0.7", HTTP_USER_AGENT="pytest-browser"
        )
        request.user = admin_account

        entry = self.service.log("update_penduduk", "Memperbarui data penduduk: Budi", request=request)

        assert entry.user == admin_account
        assert entry.ip_address == "10.0.0.7"
        assert entry.user_agent == "pytest-browser"
        assert entry.properties == {}

    def test_forwarded_for_used_behind_trusted_proxy(self, settings):
        settings.AUDIT_TRUST_X_FORWARDED_FOR = True
        request = self.factory.get(
            "/", REMOTE_ADDR="10.0.0.1", HTTP_X_FORWARDED_FOR="203.0.113.9, 10.0.0.1"
        )
        request.user = AnonymousUser()

        entry = self.service.log("delete_penduduk", "Menghapus penduduk: Budi", request=request)

        assert entry.ip_address == "203.0.113.9"
        assert entry.user is None

    def test_forwarded_for_ignored_by_default(self):
        request = self.factory.get("/", REMOTE_ADDR="10.0.0.1", HTTP_X_FORWARDED_FOR="203.0.113.9")
        request.user = AnonymousUser()

        entry = self.service.log("delete_penduduk", "Menghapus penduduk: Budi", request=request)

        assert entry.ip_address == "10.0.0.1"

    @pytest.mark.parametrize(
        "forwarded_for, remote_addr, expected",
        [
            ("not-an-ip", "10.0.0.1", "10.0.0.1"),
            ("999.1.1.1, 10.0.0.2", "10.0.0.1", "10.0.0.1"),
            ("not-an-ip", "garbage", None),
            ("2001:db8::1", "10.0.0.1", "2001:db8::1"),
        ],
    )
    def test_invalid_client_address_is_dropped(
        self, settings, forwarded_for, remote_addr, expected
    ):
        settings.AUDIT_TRUST_X_FORWARDED_FOR = True
        request = self.factory.get(
            "/", REMOTE_ADDR=remote_addr, HTTP_X_FORWARDED_FOR=forwarded_for
        )
        request.user = AnonymousUser()

        entry = self.service.log("update_penduduk", "Memperbarui data penduduk: Budi", request=request)

        entry.refresh_from_db()
        assert entry.ip_address == expected

    def test_malformed_header_does_not_block_mutation(self, panel_client, create_penduduk):
        penduduk = create_penduduk(nama="Budi")

        response = panel_client.post(
            f"/admin/penduduk/{penduduk.id}/",
            {"_method": "DELETE"},
            HTTP_X_FORWARDED_FOR="not-an-ip",
            REMOTE_ADDR="10.0.0.1",
        )

        assert response.status_code == 302
        entry = ActivityLog.objects.get()
        assert entry.ip_address == "10.0.0.1"

    def test_without_request(self):
        entry = self.service.log("create_penduduk", "Menambahkan penduduk baru: Budi")

        assert entry.user is None
        assert entry.ip_address is None
        assert entry.user_agent is None

    def test_entries_are_appended(self):
        for i in range(3):
            self.service.log_penduduk_activity("update_penduduk", f"Perubahan {i}", 1)

        assert ActivityLog.objects.filter(subject_id=1).count() == 3
