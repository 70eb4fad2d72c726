"""
salonslots - appointment availability for salons.
"""

__version__ = "0.1.0"
