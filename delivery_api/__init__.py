"""
                Delivery Tech API

Delivery-platform backend: customers browse restaurants and products
and place orders priced authoritatively from the live catalog.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
