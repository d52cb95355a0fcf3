import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import penduduk.models.user


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                (
                    "last_login",
                    models.DateTimeField(blank=True, null=True, verbose_name="last login"),
                ),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions without explicitly assigning them.",
                        verbose_name="superuser status",
                    ),
                ),
                (
                    "first_name",
                    models.CharField(blank=True, max_length=150, verbose_name="first name"),
                ),
                (
                    "last_name",
                    models.CharField(blank=True, max_length=150, verbose_name="last name"),
                ),
                (
                    "is_staff",
                    models.BooleanField(
                        default=False,
                        help_text="Designates whether the user can log into this admin site.",
                        verbose_name="staff status",
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        default=True,
                        help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.",
                        verbose_name="active",
                    ),
                ),
                (
                    "date_joined",
                    models.DateTimeField(
                        default=django.utils.timezone.now, verbose_name="date joined"
                    ),
                ),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("name", models.CharField(max_length=255)),
                (
                    "role",
                    models.CharField(
                        choices=[("admin", "Administrator"), ("penduduk", "Penduduk")],
                        db_index=True,
                        default="penduduk",
                        help_text="Access role of the account",
                        max_length=20,
                    ),
                ),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "db_table": "users",
                "ordering": ["-date_joined"],
            },
            managers=[
                ("objects", penduduk.models.user.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name="Penduduk",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "nik",
                    models.CharField(
                        blank=True,
                        help_text="Nomor Induk Kependudukan (16 characters)",
                        max_length=16,
                        null=True,
                        unique=True,
                    ),
                ),
                ("nama", models.CharField(max_length=255)),
                ("alamat", models.TextField(blank=True, null=True)),
                (
                    "jenis_kelamin",
                    models.CharField(
                        choices=[("Laki-laki", "Laki-laki"), ("Perempuan", "Perempuan")],
                        max_length=20,
                    ),
                ),
                ("tempat_lahir", models.CharField(blank=True, max_length=255, null=True)),
                ("tanggal_lahir", models.DateField(blank=True, null=True)),
                ("agama", models.CharField(blank=True, max_length=255, null=True)),
                ("status_perkawinan", models.CharField(blank=True, max_length=255, null=True)),
                ("pekerjaan", models.CharField(blank=True, max_length=255, null=True)),
                ("kewarganegaraan", models.CharField(blank=True, max_length=255, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.OneToOneField(
                        help_text="Account owning this record; deleting it removes the record",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="penduduk",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Penduduk",
                "verbose_name_plural": "Penduduk",
                "db_table": "penduduks",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["nama"], name="penduduks_nama_6f1c2e_idx"),
                    models.Index(fields=["created_at"], name="penduduks_created_3a9b41_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ActivityLog",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("action", models.CharField(db_index=True, max_length=100)),
                ("description", models.TextField()),
                ("subject_type", models.CharField(blank=True, max_length=100, null=True)),
                ("subject_id", models.BigIntegerField(blank=True, null=True)),
                ("properties", models.JSONField(blank=True, default=dict)),
                ("ip_address", models.GenericIPAddressField(blank=True, null=True)),
                ("user_agent", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        help_text="Account that performed the action",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="activity_logs",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "activity_logs",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["subject_type", "subject_id"], name="activity_lo_subject_8d2f7c_idx"
                    ),
                ],
            },
        ),
    ]
