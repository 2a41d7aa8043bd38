"""Fetch cloud instance metadata at boot and write it out as plain files."""

__version__ = '0.1.0'
