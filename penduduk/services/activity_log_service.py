import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_ipv46_address

from penduduk.models import ActivityLog

logger = logging.getLogger(__name__)


class ActivityLogService:
    """Append-only writer for the administrative audit trail."""

    def log(
        self,
        action: str,
        description: str,
        subject_type=None,
        subject_id=None,
        properties=None,
        user=None,
        request=None,
    ) -> ActivityLog:
        """
        Record one administrative action.

        Args:
            action: Action tag, e.g. "create_penduduk"
            description: Human readable summary shown in the activity feed
            subject_type: Kind of record the action touched
            subject_id: Primary key of that record
            properties: Free-form metadata stored as JSON
            user: Acting account; falls back to the request's user
            request: Current HTTP request, used for actor, IP and user agent

        Returns:
            ActivityLog: The stored entry
        """
        if user is None and request is not None:
            request_user = getattr(request, "user", None)
            if request_user is not None and request_user.is_authenticated:
                user = request_user

        entry = ActivityLog.objects.create(
            user=user,
            action=action,
            description=description,
            subject_type=subject_type,
            subject_id=subject_id,
            properties=properties or {},
            ip_address=self._client_ip(request),
            user_agent=self._user_agent(request),
        )
        logger.info(f"Activity logged: {action} on {subject_type} {subject_id}")
        return entry

    def log_penduduk_activity(
        self, action: str, description: str, penduduk_id, properties=None, user=None, request=None
    ) -> ActivityLog:
        return self.log(
            action,
            description,
            subject_type=ActivityLog.SUBJECT_PENDUDUK,
            subject_id=penduduk_id,
            properties=properties,
            user=user,
            request=request,
        )

    @staticmethod
    def _client_ip(request):
        """
        Client address for the audit entry.

        X-Forwarded-For is client-controlled, so it is read only when
        AUDIT_TRUST_X_FORWARDED_FOR says a proxy sets it. Anything that is not
        a valid IPv4/IPv6 address is discarded.
        """
        if request is None:
            return None

        candidates = []
        forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
        if forwarded_for and settings.AUDIT_TRUST_X_FORWARDED_FOR:
            candidates.append(forwarded_for.split(",")[0].strip())
        candidates.append(request.META.get("REMOTE_ADDR"))

        for candidate in candidates:
            if not candidate:
                continue
            try:
                validate_ipv46_address(candidate)
            except ValidationError:
                logger.warning(f"Ignoring invalid client address in audit entry: {candidate!r}")
                continue
            return candidate
        return None

    @staticmethod
    def _user_agent(request):
        if request is None:
            return None
        return request.META.get("HTTP_USER_AGENT") or None
