"""
Output Module - Statement export.
"""

from .writer import StatementWriter, OutputWriteError, write_json, write_csv

__all__ = [
    'StatementWriter',
    'OutputWriteError',
    'write_json',
    'write_csv',
]
