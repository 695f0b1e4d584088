"""FinanceSaathi - invoice capture and expense dashboard backend."""

__version__ = "1.0.0"
