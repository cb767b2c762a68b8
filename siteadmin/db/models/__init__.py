"""ORM models aggregate exports."""
from .site import (  # noqa: F401
	Base,
	ConfigRecord,
	ContentType,
	Role,
	User,
	users_roles,
)

__all__ = [
	"Base",
	"ConfigRecord",
	"ContentType",
	"Role",
	"User",
	"users_roles",
]
