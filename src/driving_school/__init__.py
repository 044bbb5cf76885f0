"""
Driving school lesson scheduling.

Availability resolution, booking validation and lesson bookkeeping over
records held by an external store.
"""

__version__ = "0.1.0"
