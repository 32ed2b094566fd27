"""Constants for Rowguide."""
