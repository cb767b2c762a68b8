"""Constants shared by the listing, seeding and settings layers."""
from __future__ import annotations

# Reserved user id for unauthenticated visitors; never listed.
ANONYMOUS_UID = 0

ANONYMOUS_RID = "anonymous"
AUTHENTICATED_RID = "authenticated"
ADMINISTRATOR_RID = "administrator"

PEOPLE_PAGE_SIZE = 50

# CSS class hiding a table column on narrow screens.
RESPONSIVE_PRIORITY_LOW = "priority-low"
RESPONSIVE_PRIORITY_MEDIUM = "priority-medium"

BOOK_SETTINGS = "book.settings"

__all__ = [
    "ANONYMOUS_UID",
    "ANONYMOUS_RID",
    "AUTHENTICATED_RID",
    "ADMINISTRATOR_RID",
    "PEOPLE_PAGE_SIZE",
    "RESPONSIVE_PRIORITY_LOW",
    "RESPONSIVE_PRIORITY_MEDIUM",
    "BOOK_SETTINGS",
]
