"""
TimeBook - Source Package

A personal time-accounting ledger for the command line.

DESIGN PRINCIPLES:
1. One command per invocation: load, execute, save
2. Fail early, fail visibly
3. A failed command never changes the ledger
4. Every command is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "TimeBook Team"
