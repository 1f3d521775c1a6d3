# src/esg_signals/core/errors.py
from __future__ import annotations


class ESGSignalsError(Exception):
    """Base class for every error raised by the engine's boundary code."""


class DocumentDecodeError(ESGSignalsError):
    """A source document could not be turned into plain text."""


class PersistenceError(ESGSignalsError):
    """A data-store collaborator rejected or failed a write."""


class RequestValidationError(ESGSignalsError):
    """An incoming pipeline request is missing a required field."""
