"""
Marketplace API: member identity, credentials, OAuth login and products.
"""

__version__ = "0.1.0"
