#!/usr/bin/env python3

"""Typed failures delivered through the futures returned by the tree."""

# Result codes shared with media library sessions.
RESULT_ERROR_UNKNOWN = -1
RESULT_ERROR_IO = -2
RESULT_ERROR_BAD_VALUE = -3
RESULT_ERROR_NOT_SUPPORTED = -6


class BrowseError(Exception):
    """Base class for per-request browse failures."""

    code = RESULT_ERROR_UNKNOWN

    def __init__(self, message: str, node_id: str = None):
        super().__init__(message)
        self.node_id = node_id


class BadValueError(BrowseError):
    """The identifier does not name anything the tree or server knows."""

    code = RESULT_ERROR_BAD_VALUE


class UnimplementedError(BrowseError):
    """The identifier is recognized but nothing is wired to answer it."""

    code = RESULT_ERROR_NOT_SUPPORTED


class DataSourceError(BrowseError):
    """The data source failed while answering a request."""

    code = RESULT_ERROR_IO


class RegistryError(Exception):
    """Static tree wiring referenced a missing or duplicate node."""
