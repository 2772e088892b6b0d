"""djgraph: lay out and route DJ track connection graphs."""

__version__ = "0.1.0"
