"""Personal loan bookkeeping: loan records, portfolio aggregation and risk analytics."""

__version__ = "2.0.0"
