"""
Rowguide Core

Shared sequence model, constants, exceptions and protocols for the
rowguide packages.
"""

__version__ = "0.3.0"
