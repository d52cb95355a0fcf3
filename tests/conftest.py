"""
Pytest configuration and shared fixtures for the test suite.
"""

import itertools

import pytest
from unittest.mock import MagicMock
from penduduk.models import Penduduk, User
from penduduk.rabbitmq import publisher


_sequence = itertools.count(1)


@pytest.fixture
def sample_penduduk_data():
    """Minimal valid payload for creating a penduduk with its account."""
    return {
        "nama": "Budi",
        "jenis_kelamin": "Laki-laki",
        "email": "budi@x.com",
        "password": "password1",
    }


@pytest.fixture
def full_penduduk_data(sample_penduduk_data):
    """Payload with every optional demographic field filled in."""
    return {
        **sample_penduduk_data,
        "nik": "3201010101010001",
        "alamat": "Jl. Merdeka No. 1, Bogor",
        "tempat_lahir": "Bogor",
        "tanggal_lahir": "1990-05-17",
        "agama": "Islam",
        "status_perkawinan": "Kawin",
        "pekerjaan": "Petani",
        "kewarganegaraan": "Indonesia",
    }


@pytest.fixture
def admin_account(db):
    """Administrator allowed into the penduduk admin panel."""
    return User.objects.create_user(
        email="admin@desa.id",
        password="adminpass123",
        name="Admin Desa",
        role=User.ROLE_ADMIN,
    )


@pytest.fixture
def panel_client(client, admin_account):
    """Django test client logged in as an administrator."""
    client.force_login(admin_account)
    return client


@pytest.fixture
def create_penduduk(db):
    """Factory fixture to create a penduduk record and its owning account."""

    def _create_penduduk(nama="Budi", email=None, nik=None, **kwargs):
        number = next(_sequence)
        user = User.objects.create_user(
            email=email or f"penduduk{number}@desa.id",
            password="password1",
            name=nama,
        )
        return Penduduk.objects.create(
            user=user,
            nama=nama,
            nik=nik,
            jenis_kelamin=kwargs.pop("jenis_kelamin", Penduduk.LAKI_LAKI),
            kewarganegaraan=kwargs.pop("kewarganegaraan", "Indonesia"),
            **kwargs,
        )

    return _create_penduduk


@pytest.fixture
def reset_publisher():
    """Drop the cached global publisher before and after a test."""
    publisher._publisher = None
    yield
    publisher._publisher = None


@pytest.fixture
def mock_pika_connection(mocker, reset_publisher):
    """Mock pika RabbitMQ connection."""
    mock_connection = MagicMock()
    mock_channel = MagicMock()
    mock_connection.channel.return_value = mock_channel
    mock_connection.is_closed = False

    mocker.patch("pika.BlockingConnection", return_value=mock_connection)
    return mock_connection, mock_channel
