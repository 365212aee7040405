"""Query layer package for typed portal entity fetches."""

from .interfaces import FilterCatalog, FilterMapping, PortalQueryPort
from .portal_queries import PortalQueryService

__all__ = ["FilterCatalog", "FilterMapping", "PortalQueryPort", "PortalQueryService"]
