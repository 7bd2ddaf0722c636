"""Assembly checking for NIEM and other XML Schema document sets."""

__version__ = "0.1.0"
