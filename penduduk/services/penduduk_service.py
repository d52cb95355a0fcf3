import logging
from datetime import timedelta

from django.conf import settings
from django.contrib.humanize.templatetags.humanize import naturaltime
from django.core.paginator import Paginator
from django.db import IntegrityError, transaction
from django.db.models import Count, Q
from django.utils import timezone

from penduduk.api.serializers import PendudukCreateSerializer, PendudukUpdateSerializer
from penduduk.exceptions import PendudukNotFound, PendudukValidationError
from penduduk.models import ActivityLog, Penduduk, User
from penduduk.services.activity_log_service import ActivityLogService

logger = logging.getLogger(__name__)

OPTIONAL_FIELDS = (
    "nik",
    "alamat",
    "tempat_lahir",
    "tanggal_lahir",
    "agama",
    "status_perkawinan",
    "pekerjaan",
    "kewarganegaraan",
)

RECORD_FIELDS = ("nama", "jenis_kelamin") + OPTIONAL_FIELDS


def format_registration_date(joined_at) -> str:
    """Absolute registration timestamp in the server's local time."""
    return timezone.localtime(joined_at).strftime("%Y-%m-%d %H:%M:%S")


def humanize_registration_date(joined_at) -> str:
    """Relative rendering such as "3 hours ago"."""
    return str(naturaltime(joined_at))


class PendudukService:
    """Service class for the penduduk registry: search, create, update, delete and audit."""

    def __init__(self, activity_log_service=None):
        self.activity_log = activity_log_service or ActivityLogService()
        self.page_size = settings.PENDUDUK_PAGE_SIZE

    def search_queryset(self, search=None):
        """Records newest first, optionally filtered by name or account email."""
        queryset = Penduduk.objects.select_related("user").order_by("-created_at", "-id")
        if search:
            queryset = queryset.filter(Q(nama__icontains=search) | Q(user__email__icontains=search))
        return queryset

    def list_penduduk(self, search=None, page=1, page_size=None):
        """
        Return one page of penduduk records.

        Args:
            search: Case-insensitive substring matched against name or email
            page: 1-based page number; invalid values fall back to a valid page
            page_size: Records per page, defaults to PENDUDUK_PAGE_SIZE

        Returns:
            Page: Django page whose items carry registration_date and
            registration_date_formatted
        """
        paginator = Paginator(self.search_queryset(search), page_size or self.page_size)
        page_obj = paginator.get_page(page)
        page_obj.object_list = [self._with_registration_dates(p) for p in page_obj.object_list]
        return page_obj

    def get_penduduk(self, penduduk_id) -> Penduduk:
        """Fetch a single record with its registration dates attached."""
        return self._with_registration_dates(self._get_or_raise(penduduk_id))

    def get_stats(self, search=None) -> dict:
        """Counts shown on the list page's summary cards."""
        recent_since = timezone.now() - timedelta(days=settings.PENDUDUK_RECENT_DAYS)
        has_nik = Q(nik__isnull=False) & ~Q(nik="")

        counts = self.search_queryset(search).aggregate(
            total=Count("id"),
            complete=Count("id", filter=has_nik),
            recent=Count("id", filter=Q(user__date_joined__gte=recent_since)),
        )
        counts["incomplete"] = counts["total"] - counts["complete"]
        return counts

    def create_penduduk(self, data, actor=None, request=None) -> Penduduk:
        """
        Register a penduduk together with its login account.

        The account (role penduduk) and the record are written in one
        transaction, so a failed record insert leaves no orphan account.

        Args:
            data: Submitted fields; email, password, nama and jenis_kelamin are required
            actor: Administrator performing the action
            request: Current HTTP request, if any

        Returns:
            Penduduk: The new record

        Raises:
            PendudukValidationError: One or more fields are invalid; nothing is written
        """
        serializer = PendudukCreateSerializer(data=self._clean_input(data))
        if not serializer.is_valid():
            logger.warning(f"Rejected penduduk creation: {sorted(serializer.errors)}")
            raise PendudukValidationError(self._error_dict(serializer.errors))

        validated = serializer.validated_data
        fields = self._record_values(validated)
        fields.setdefault("tanggal_lahir", None)
        if fields["tanggal_lahir"] is None:
            fields["tanggal_lahir"] = timezone.localdate()
        if not fields.get("kewarganegaraan"):
            fields["kewarganegaraan"] = settings.PENDUDUK_DEFAULT_NATIONALITY

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    email=validated["email"],
                    password=validated["password"],
                    name=validated["nama"],
                    role=User.ROLE_PENDUDUK,
                )
                penduduk = Penduduk.objects.create(user=user, **fields)
        except IntegrityError as e:
            raise self._conflict_error(e, email=validated["email"], nik=fields.get("nik"))

        self.activity_log.log_penduduk_activity(
            ActivityLog.ACTION_CREATE_PENDUDUK,
            f"Menambahkan penduduk baru: {validated['nama']}",
            penduduk.id,
            {"nama": validated["nama"], "email": validated["email"]},
            user=actor,
            request=request,
        )

        logger.info(f"Created penduduk {penduduk.id} for user {user.id}")
        return penduduk

    def update_penduduk(self, penduduk_id, data, actor=None, request=None):
        """
        Update a record and keep its account's display name in sync.

        Fields left out of `data` keep their current value; the NIK
        uniqueness check ignores the record being edited.

        Raises:
            PendudukNotFound: No record with this id
            PendudukValidationError: One or more fields are invalid; nothing is written
        """
        penduduk = self._get_or_raise(penduduk_id)

        serializer = PendudukUpdateSerializer(penduduk, data=self._clean_input(data))
        if not serializer.is_valid():
            logger.warning(f"Rejected update of penduduk {penduduk_id}: {sorted(serializer.errors)}")
            raise PendudukValidationError(self._error_dict(serializer.errors))

        fields = self._record_values(serializer.validated_data)

        try:
            with transaction.atomic():
                User.objects.filter(pk=penduduk.user_id).update(name=fields["nama"])
                for name, value in fields.items():
                    setattr(penduduk, name, value)
                penduduk.save()
        except IntegrityError as e:
            raise self._conflict_error(e, nik=fields.get("nik"), exclude_pk=penduduk.pk)

        self.activity_log.log_penduduk_activity(
            ActivityLog.ACTION_UPDATE_PENDUDUK,
            f"Memperbarui data penduduk: {fields['nama']}",
            penduduk.id,
            {"nama": fields["nama"], "nik": fields.get("nik")},
            user=actor,
            request=request,
        )

        logger.info(f"Updated penduduk {penduduk.id}")

    def delete_penduduk(self, penduduk_id, actor=None, request=None):
        """
        Delete a penduduk by deleting its account.

        The audit entry is stored first, then the account is removed and the
        foreign-key cascade takes the record with it.

        Raises:
            PendudukNotFound: No record with this id
        """
        penduduk = self._get_or_raise(penduduk_id)

        self.activity_log.log_penduduk_activity(
            ActivityLog.ACTION_DELETE_PENDUDUK,
            f"Menghapus penduduk: {penduduk.nama}",
            penduduk.id,
            {"nama": penduduk.nama, "nik": penduduk.nik},
            user=actor,
            request=request,
        )

        with transaction.atomic():
            penduduk.user.delete()

        logger.info(f"Deleted penduduk {penduduk_id} and its account {penduduk.user_id}")

    def _get_or_raise(self, penduduk_id) -> Penduduk:
        try:
            return Penduduk.objects.select_related("user").get(pk=penduduk_id)
        except (Penduduk.DoesNotExist, ValueError, TypeError):
            raise PendudukNotFound(penduduk_id)

    @staticmethod
    def _with_registration_dates(penduduk):
        joined_at = penduduk.user.date_joined
        penduduk.registration_date = format_registration_date(joined_at)
        penduduk.registration_date_formatted = humanize_registration_date(joined_at)
        return penduduk

    @staticmethod
    def _clean_input(data) -> dict:
        """Flatten form data and treat empty optional inputs as missing values."""
        if hasattr(data, "dict"):
            data = data.dict()
        cleaned = dict(data)
        for name in OPTIONAL_FIELDS:
            value = cleaned.get(name)
            if isinstance(value, str) and not value.strip():
                cleaned[name] = None
        return cleaned

    @staticmethod
    def _record_values(validated) -> dict:
        values = {name: validated[name] for name in RECORD_FIELDS if name in validated}
        for name in OPTIONAL_FIELDS:
            if values.get(name) == "":
                values[name] = None
        return values

    @staticmethod
    def _error_dict(errors) -> dict:
        return {field: [str(message) for message in messages] for field, messages in errors.items()}

    @staticmethod
    def _conflict_error(error, email=None, nik=None, exclude_pk=None):
        """Translate a unique-constraint race into the same field errors validation reports."""
        errors = {}
        if email and User.objects.filter(email__iexact=email).exists():
            errors["email"] = ["Email sudah terdaftar."]
        if nik:
            duplicates = Penduduk.objects.filter(nik=nik)
            if exclude_pk is not None:
                duplicates = duplicates.exclude(pk=exclude_pk)
            if duplicates.exists():
                errors["nik"] = ["NIK sudah terdaftar."]

        if not errors:
            return error

        logger.warning(f"Unique constraint conflict on {sorted(errors)}: {str(error)}")
        return PendudukValidationError(errors)
