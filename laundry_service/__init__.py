"""Laundry order service: order placement, lifecycle and status history"""

__version__ = "1.0.0"
