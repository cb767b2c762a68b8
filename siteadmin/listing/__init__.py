"""Entity listing building blocks (header, sort, pager, row builders).

``siteadmin.listing.users`` depends on the database layer and is imported
directly by callers, not re-exported here.
"""
from .columns import ColumnSpec, Header
from .pager import Pager
from .request import ListRequest

__all__ = ["ColumnSpec", "Header", "Pager", "ListRequest"]
