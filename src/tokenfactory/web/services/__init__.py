"""Web services: build TokenFactory transactions and submit them via the wallet."""

from tokenfactory.web.services.submitter import TransactionSubmitter
from tokenfactory.web.services.transaction_builder import TransactionBuilder

__all__ = [
    "TransactionBuilder",
    "TransactionSubmitter",
]
