"""
FinTrack - Personal Finance Tracker Service

A FastAPI-based service that records income and expense transactions,
aggregates them over time windows, renders dashboard charts and
exports filtered data.
"""

__version__ = "0.1.0"
