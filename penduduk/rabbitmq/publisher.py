import json
import logging
import pika
from django.conf import settings

logger = logging.getLogger(__name__)


class RabbitMQPublisher:
    """RabbitMQ publisher for penduduk lifecycle events."""

    def __init__(self):
        """Initialize RabbitMQ publisher with configuration from settings."""
        self.connection = None
        self.channel = None
        self._initialize_connection()

    @staticmethod
    def queues():
        return [
            settings.RABBITMQ_PENDUDUK_CREATED_QUEUE,
            settings.RABBITMQ_PENDUDUK_UPDATED_QUEUE,
            settings.RABBITMQ_PENDUDUK_DELETED_QUEUE,
        ]

    def _initialize_connection(self):
        """Initialize the RabbitMQ connection and channel."""
        try:
            credentials = pika.PlainCredentials(settings.RABBITMQ_USER, settings.RABBITMQ_PASSWORD)
            parameters = pika.ConnectionParameters(
                host=settings.RABBITMQ_HOST,
                port=settings.RABBITMQ_PORT,
                virtual_host=settings.RABBITMQ_VHOST,
                credentials=credentials,
                heartbeat=600,
                blocked_connection_timeout=300,
            )
            self.connection = pika.BlockingConnection(parameters)
            self.channel = self.connection.channel()

            for queue in self.queues():
                self.channel.queue_declare(queue=queue, durable=True)

            logger.info("RabbitMQ publisher initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize RabbitMQ publisher: {str(e)}")
            self.connection = None
            self.channel = None

    def publish(self, queue: str, message: dict) -> bool:
        """
        Publish a persistent JSON message to a queue.

        Args:
            queue: Routing key / queue name
            message: JSON-serializable payload

        Returns:
            bool: True if successful, False otherwise
        """
        if not self.channel:
            logger.warning("RabbitMQ channel not initialized, attempting to reconnect")
            self._initialize_connection()
            if not self.channel:
                logger.error("Failed to reconnect to RabbitMQ")
                return False

        try:
            self.channel.basic_publish(
                exchange="",
                routing_key=queue,
                body=json.dumps(message),
                properties=pika.BasicProperties(
                    delivery_mode=2, content_type="application/json"  # Make message persistent
                ),
            )
            logger.info(f"Published {queue} event for penduduk {message.get('id')}")
            return True

        except Exception as e:
            logger.error(f"Failed to publish {queue} event: {str(e)}")
            # Try to reconnect for next time
            self._close()
            return False

    def _close(self):
        """Close the RabbitMQ connection."""
        try:
            if self.connection and not self.connection.is_closed:
                self.connection.close()
                logger.info("RabbitMQ connection closed")
        except Exception as e:
            logger.error(f"Error closing RabbitMQ connection: {str(e)}")
        finally:
            self.connection = None
            self.channel = None


# Global publisher instance
_publisher = None


def get_publisher() -> RabbitMQPublisher:
    """Get or create the global publisher instance."""
    global _publisher
    if _publisher is None:
        _publisher = RabbitMQPublisher()
    return _publisher


def penduduk_payload(penduduk) -> dict:
    return {
        "id": penduduk.id,
        "userId": penduduk.user_id,
        "nik": penduduk.nik,
        "nama": penduduk.nama,
    }


def publish_penduduk_created(payload: dict) -> bool:
    """Publish a penduduk.created event."""
    return get_publisher().publish(settings.RABBITMQ_PENDUDUK_CREATED_QUEUE, payload)


def publish_penduduk_updated(payload: dict) -> bool:
    """Publish a penduduk.updated event."""
    return get_publisher().publish(settings.RABBITMQ_PENDUDUK_UPDATED_QUEUE, payload)


def publish_penduduk_deleted(payload: dict) -> bool:
    """
    Publish a penduduk.deleted event.
    Consumers holding data keyed by the penduduk (documents, notifications) drop it.
    """
    return get_publisher().publish(settings.RABBITMQ_PENDUDUK_DELETED_QUEUE, payload)
