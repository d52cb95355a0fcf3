class PendudukError(Exception):
    """Base class for errors raised by the penduduk services."""


class PendudukNotFound(PendudukError):
    def __init__(self, penduduk_id):
        self.penduduk_id = penduduk_id
        super().__init__(f"Penduduk {penduduk_id} not found")


class PendudukValidationError(PendudukError):
    """
    Raised before any write when submitted fields are invalid.

    `errors` maps each offending field to a list of messages, e.g.
    {"email": ["Email sudah terdaftar."], "nik": ["NIK harus 16 karakter."]}.
    """

    def __init__(self, errors):
        self.errors = errors
        super().__init__(f"Invalid fields: {', '.join(sorted(errors))}")
