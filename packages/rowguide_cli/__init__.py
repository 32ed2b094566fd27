"""Rowguide CLI - command-line access to pattern navigation"""

__version__ = "0.3.0"
