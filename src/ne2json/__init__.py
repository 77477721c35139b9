"""
ne2json - Natural Earth country boundaries to normalized sovereign state records.
"""

__version__ = "0.1.0"
