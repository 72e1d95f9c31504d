"""
Ledger - Source Package

A personal ledger: dated deposits and payments per user, kept in a
pipe-delimited file and queried by type, date range, vendor, description
and amount.

DESIGN PRINCIPLES:
1. Users see their own transactions; admins see everyone's
2. A record is stored once, however often the file is re-read
3. Nothing is in memory that is not on disk
4. A bad row or a missing file is reported, never fatal
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Ledger Team"
