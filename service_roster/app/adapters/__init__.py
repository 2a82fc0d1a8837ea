"""
Adapters package for the Roster Service.

Contains the HTTP transport used to reach upstream data. Transport
failures are reported as values; callers decide whether a failure is
fatal (listing) or recoverable (single item).
"""

from .transport import HttpTransport, TransportResponse

__all__ = [
    "HttpTransport",
    "TransportResponse",
]
