"""
Stockroom - small-business inventory tracker.

Stock-in recording, the stock-out request lifecycle and the
analytics derived from the resulting ledger.
"""

__version__ = '1.0.0'
