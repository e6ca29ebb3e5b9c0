"""
Cafe menu back end: admin-managed catalog, public menu and menu assistant.
"""

__version__ = "1.0.0"
