# govstock/exceptions.py
"""Errors raised while enriching an uploaded bill workbook."""

from __future__ import annotations


class GovStockError(Exception):
    """Base exception for enrichment failures."""


class InvalidUploadError(GovStockError):
    """The multipart form is unparsable or the `excel` field is missing."""


class TransportError(GovStockError):
    """The model call failed at the network/API level. Fatal for the batch."""


class CodecError(GovStockError):
    """The workbook could not be read or written."""


class ParseFailure(GovStockError):
    """Model output for one field was malformed. Recovered by the parser."""
