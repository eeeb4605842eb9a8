"""Application ports: repository and service protocols."""

from reaper.application.interfaces.repositories import IRecordIndex, IStatusLedger
from reaper.application.interfaces.services import IBlobStore, IDeleteAuthorizer

__all__ = [
    "IBlobStore",
    "IDeleteAuthorizer",
    "IRecordIndex",
    "IStatusLedger",
]
