"""Router modules exposed for convenient imports."""

from . import healthz, pictures, users

__all__ = ["healthz", "pictures", "users"]
