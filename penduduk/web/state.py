"""
Modal state of the penduduk admin page.

At most one modal is open at a time. The page moves between:

    closed --open_add--> adding
    closed --open_edit(penduduk)--> editing(id)
    closed --open_delete(penduduk)--> deleting(id)
    any --close--> closed
    adding/editing --fail(draft, errors)--> same mode, draft and errors kept

The draft is a plain dict of form values, detached from the record it was
copied from until the form is submitted.
"""

from penduduk.models import Penduduk

DRAFT_FIELDS = (
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
)


class InvalidTransition(Exception):
    pass


def empty_draft(default_nationality):
    draft = {name: "" for name in DRAFT_FIELDS}
    draft.update(
        {
            "jenis_kelamin": Penduduk.LAKI_LAKI,
            "kewarganegaraan": default_nationality,
            "email": "",
        }
    )
    return draft


def draft_from_penduduk(penduduk):
    """Copy a record into form values, dates as YYYY-MM-DD."""
    draft = {}
    for name in DRAFT_FIELDS:
        value = getattr(penduduk, name)
        if name == "tanggal_lahir":
            value = value.strftime("%Y-%m-%d") if value else ""
        draft[name] = "" if value is None else value
    draft["email"] = penduduk.user.email
    return draft


class PanelState:
    CLOSED = "closed"
    ADDING = "adding"
    EDITING = "editing"
    DELETING = "deleting"

    def __init__(self, default_nationality="Indonesia"):
        self.default_nationality = default_nationality
        self.mode = self.CLOSED
        self.target = None
        self.draft = {}
        self.errors = {}

    @property
    def is_open(self):
        return self.mode != self.CLOSED

    @property
    def target_id(self):
        return self.target.pk if self.target is not None else None

    def open_add(self):
        self._require_closed()
        self.mode = self.ADDING
        self.draft = empty_draft(self.default_nationality)
        self.errors = {}
        return self

    def open_edit(self, penduduk):
        self._require_closed()
        self.mode = self.EDITING
        self.target = penduduk
        self.draft = draft_from_penduduk(penduduk)
        self.errors = {}
        return self

    def open_delete(self, penduduk):
        self._require_closed()
        self.mode = self.DELETING
        self.target = penduduk
        self.draft = {}
        self.errors = {}
        return self

    def fail(self, draft, errors):
        """Keep the form open with what was submitted and the field errors."""
        if self.mode not in (self.ADDING, self.EDITING):
            raise InvalidTransition(f"Cannot report form errors while {self.mode}")
        self.draft = {**self.draft, **{k: v for k, v in draft.items() if k != "password"}}
        self.errors = errors
        return self

    def close(self):
        self.mode = self.CLOSED
        self.target = None
        self.draft = {}
        self.errors = {}
        return self

    def _require_closed(self):
        if self.is_open:
            raise InvalidTransition(f"Another modal is already open ({self.mode})")
