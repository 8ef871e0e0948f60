from . import (
    admin,
    auth,
    backend_status,
    customer,
    health,
)

__all__ = [
    "admin",
    "auth",
    "backend_status",
    "customer",
    "health",
]
