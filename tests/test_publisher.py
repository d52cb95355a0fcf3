"""
Tests for penduduk lifecycle events published to RabbitMQ.
"""

import json

import pytest
from penduduk.models import Penduduk
from penduduk.rabbitmq.publisher import RabbitMQPublisher, penduduk_payload
from penduduk.services.penduduk_service import PendudukService


class TestRabbitMQPublisher:
    """Test cases for the publisher itself."""

    def test_declares_queues(self, mock_pika_connection):
        _, mock_channel = mock_pika_connection

        RabbitMQPublisher()

        declared = [call.kwargs["queue"] for call in mock_channel.queue_declare.call_args_list]
        assert declared == ["penduduk.created", "penduduk.updated", "penduduk.deleted"]

    def test_publish_success(self, mock_pika_connection):
        _, mock_channel = mock_pika_connection

        result = RabbitMQPublisher().publish("penduduk.created", {"id": 1, "nama": "Budi"})

        assert result is True
        kwargs = mock_channel.basic_publish.call_args.kwargs
        assert kwargs["routing_key"] == "penduduk.created"
        assert json.loads(kwargs["body"]) == {"id": 1, "nama": "Budi"}
        assert kwargs["properties"].delivery_mode == 2

    def test_publish_failure_returns_false(self, mock_pika_connection):
        mock_connection, mock_channel = mock_pika_connection
        mock_channel.basic_publish.side_effect = Exception("channel closed")
        publisher = RabbitMQPublisher()

        assert publisher.publish("penduduk.deleted", {"id": 1}) is False
        assert publisher.channel is None
        mock_connection.close.assert_called_once()

    def test_publish_without_broker(self, mocker, reset_publisher):
        mocker.patch("pika.BlockingConnection", side_effect=Exception("connection refused"))

        publisher = RabbitMQPublisher()

        assert publisher.channel is None
        assert publisher.publish("penduduk.created", {"id": 1}) is False


@pytest.mark.django_db
class TestLifecycleSignals:
    """Test cases for events fired by penduduk saves and deletes."""

    @pytest.fixture(autouse=True)
    def enable_events(self, settings):
        settings.PENDUDUK_EVENTS_ENABLED = True

    def test_create_publishes_after_commit(
        self, mocker, django_capture_on_commit_callbacks, sample_penduduk_data
    ):
        mock_created = mocker.patch(
            "penduduk.rabbitmq.publisher.publish_penduduk_created", return_value=True
        )

        with django_capture_on_commit_callbacks(execute=True):
            penduduk = PendudukService().create_penduduk(sample_penduduk_data)

        mock_created.assert_called_once_with(penduduk_payload(penduduk))

    def test_update_publishes_updated(self, mocker, django_capture_on_commit_callbacks, create_penduduk):
        penduduk = create_penduduk(nama="Budi")
        mock_updated = mocker.patch(
            "penduduk.rabbitmq.publisher.publish_penduduk_updated", return_value=True
        )

        with django_capture_on_commit_callbacks(execute=True):
            PendudukService().update_penduduk(
                penduduk.id, {"nama": "Budi Santoso", "jenis_kelamin": "Laki-laki"}
            )

        mock_updated.assert_called_once()
        assert mock_updated.call_args.args[0]["nama"] == "Budi Santoso"

    def test_account_delete_publishes_deleted(
        self, mocker, django_capture_on_commit_callbacks, create_penduduk
    ):
        penduduk = create_penduduk(nama="Budi", nik="1234567890123456")
        mock_deleted = mocker.patch(
            "penduduk.rabbitmq.publisher.publish_penduduk_deleted", return_value=True
        )

        with django_capture_on_commit_callbacks(execute=True):
            PendudukService().delete_penduduk(penduduk.id)

        mock_deleted.assert_called_once_with(
            {
                "id": penduduk.id,
                "userId": penduduk.user_id,
                "nik": "1234567890123456",
                "nama": "Budi",
            }
        )

    def test_publish_failure_does_not_break_request(
        self, mocker, django_capture_on_commit_callbacks, sample_penduduk_data
    ):
        mocker.patch("penduduk.rabbitmq.publisher.publish_penduduk_created", return_value=False)

        with django_capture_on_commit_callbacks(execute=True):
            PendudukService().create_penduduk(sample_penduduk_data)

        assert Penduduk.objects.count() == 1

    def test_disabled_events_publish_nothing(
        self, settings, mocker, django_capture_on_commit_callbacks, sample_penduduk_data
    ):
        settings.PENDUDUK_EVENTS_ENABLED = False
        mock_created = mocker.patch("penduduk.rabbitmq.publisher.publish_penduduk_created")

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            PendudukService().create_penduduk(sample_penduduk_data)

        assert callbacks == []
        mock_created.assert_not_called()
