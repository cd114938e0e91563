"""
Funds Ledger: atomic, deadlock-free transfers between accounts.
"""

__version__ = "0.1.0"
