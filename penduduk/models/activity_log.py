from django.conf import settings
from django.db import models


class ActivityLog(models.Model):
    """
    Append-only audit trail of administrative actions.
    Rows are written by ActivityLogService and never updated or deleted.
    """

    ACTION_CREATE_PENDUDUK = "create_penduduk"
    ACTION_UPDATE_PENDUDUK = "update_penduduk"
    ACTION_DELETE_PENDUDUK = "delete_penduduk"

    SUBJECT_PENDUDUK = "penduduk"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="activity_logs",
        help_text="Account that performed the action",
    )
    action = models.CharField(max_length=100, db_index=True)
    description = models.TextField()
    subject_type = models.CharField(max_length=100, blank=True, null=True)
    subject_id = models.BigIntegerField(blank=True, null=True)
    properties = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(blank=True, null=True)
    user_agent = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "activity_logs"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["subject_type", "subject_id"], name="activity_lo_subject_8d2f7c_idx"),
        ]

    def __str__(self):
        return f"[{self.action}] {self.description}"
