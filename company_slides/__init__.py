"""Company slides: CSV company import and name search for slide display."""

__version__ = "0.1.0"
