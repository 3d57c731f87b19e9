"""Abstract interfaces for upstream API access."""

from .connector import APIConnector, RequestConfig

__all__ = [
    'APIConnector',
    'RequestConfig',
]
