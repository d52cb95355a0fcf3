from rest_framework import serializers
from penduduk.models import Penduduk, User


class PendudukFieldsSerializer(serializers.Serializer):
    """Validation rules shared by the create and update forms."""

    nik = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    nama = serializers.CharField(max_length=255)
    alamat = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    jenis_kelamin = serializers.ChoiceField(
        choices=Penduduk.JENIS_KELAMIN_CHOICES,
        error_messages={"invalid_choice": "Jenis kelamin harus Laki-laki atau Perempuan."},
    )
    tempat_lahir = serializers.CharField(
        max_length=255, required=False, allow_null=True, allow_blank=True
    )
    tanggal_lahir = serializers.DateField(required=False, allow_null=True)
    agama = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True)
    status_perkawinan = serializers.CharField(
        max_length=255, required=False, allow_null=True, allow_blank=True
    )
    pekerjaan = serializers.CharField(
        max_length=255, required=False, allow_null=True, allow_blank=True
    )
    kewarganegaraan = serializers.CharField(
        max_length=255, required=False, allow_null=True, allow_blank=True
    )

    def validate_nik(self, value):
        if not value:
            return None
        if len(value) != Penduduk.NIK_LENGTH:
            raise serializers.ValidationError(
                f"NIK harus {Penduduk.NIK_LENGTH} karakter."
            )

        duplicates = Penduduk.objects.filter(nik=value)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError("NIK sudah terdaftar.")
        return value


class PendudukCreateSerializer(PendudukFieldsSerializer):
    """Fields accepted when an administrator registers a new penduduk with its account."""

    email = serializers.EmailField(max_length=254)
    password = serializers.CharField(min_length=8, write_only=True, trim_whitespace=False)

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email sudah terdaftar.")
        return value


class PendudukUpdateSerializer(PendudukFieldsSerializer):
    """Fields accepted when editing an existing record; email and password are not editable here."""


class PendudukUserSerializer(serializers.ModelSerializer):
    created_at = serializers.DateTimeField(source="date_joined", read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "created_at"]


class PendudukSerializer(serializers.ModelSerializer):
    """Read representation returned by the show endpoint."""

    user = PendudukUserSerializer(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    registration_date = serializers.CharField(read_only=True)
    registration_date_formatted = serializers.CharField(read_only=True)

    class Meta:
        model = Penduduk
        fields = [
            "id",
            "user_id",
            "nik",
            "nama",
            "alamat",
            "jenis_kelamin",
            "tempat_lahir",
            "tanggal_lahir",
            "agama",
            "status_perkawinan",
            "pekerjaan",
            "kewarganegaraan",
            "created_at",
            "updated_at",
            "registration_date",
            "registration_date_formatted",
            "user",
        ]
