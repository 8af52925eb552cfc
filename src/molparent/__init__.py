"""molparent: standardization and parent extraction for molecular structures."""

__version__ = "0.1.0"
