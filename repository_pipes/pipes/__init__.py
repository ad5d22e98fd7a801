"""
Bundled repository pipes.
"""

from .base import Pipe
from .transaction import TransactionPipe
from .passwords import EncryptPasswordPipe

__all__ = [
    "Pipe",
    "TransactionPipe",
    "EncryptPasswordPipe",
]
