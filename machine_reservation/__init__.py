"""
Machine reservation service.

Clients reserve, inspect and start shared machines (e.g. laundry units)
by location through a single workflow engine backed by an authoritative
machine store and a FIFO read cache.
"""

__version__ = "0.1.0"
