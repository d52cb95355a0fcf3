from django.conf import settings
from django.db import models


class Penduduk(models.Model):
    """Demographic record of a citizen, owned by exactly one user account."""

    LAKI_LAKI = "Laki-laki"
    PEREMPUAN = "Perempuan"

    JENIS_KELAMIN_CHOICES = [
        (LAKI_LAKI, "Laki-laki"),
        (PEREMPUAN, "Perempuan"),
    ]

    NIK_LENGTH = 16

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="penduduk",
        help_text="Account owning this record; deleting it removes the record",
    )
    nik = models.CharField(
        max_length=NIK_LENGTH,
        unique=True,
        null=True,
        blank=True,
        help_text="Nomor Induk Kependudukan (16 characters)",
    )
    nama = models.CharField(max_length=255)
    alamat = models.TextField(blank=True, null=True)
    jenis_kelamin = models.CharField(max_length=20, choices=JENIS_KELAMIN_CHOICES)
    tempat_lahir = models.CharField(max_length=255, blank=True, null=True)
    tanggal_lahir = models.DateField(blank=True, null=True)
    agama = models.CharField(max_length=255, blank=True, null=True)
    status_perkawinan = models.CharField(max_length=255, blank=True, null=True)
    pekerjaan = models.CharField(max_length=255, blank=True, null=True)
    kewarganegaraan = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "penduduks"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["nama"], name="penduduks_nama_6f1c2e_idx"),
            models.Index(fields=["created_at"], name="penduduks_created_3a9b41_idx"),
        ]
        verbose_name = "Penduduk"
        verbose_name_plural = "Penduduk"

    def __str__(self):
        return f"{self.nama} ({self.nik or '-'})"

    @property
    def is_complete(self):
        """A record counts as complete once its NIK has been filled in."""
        return bool(self.nik)
