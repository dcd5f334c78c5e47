"""SheetDoc application: job configuration, conversion pipeline and CLI."""

__version__ = "0.1.0"
