"""Set-list parsing and the data model."""

from djgraph.parser.setlist import parse_setlist, parse_track

__all__ = ["parse_setlist", "parse_track"]
