"""
salonslots - appointment availability and conflict checks for salon staff.
"""

__version__ = "0.1.0"
