"""
Zone file parsing and rendering.
"""

from .zonefile import ZoneFileParser, filter_records

__all__ = ["ZoneFileParser", "filter_records"]
