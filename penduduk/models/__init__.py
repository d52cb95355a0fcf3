from .user import User
from .penduduk import Penduduk
from .activity_log import ActivityLog

__all__ = ["User", "Penduduk", "ActivityLog"]
