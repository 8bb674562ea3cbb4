"""Configuration domain exports."""

from .expectation_tags import TYPE_NAMES, ExpectationTagError, build_expectation_loader
from .loader import ConfigurationError, load_actual_document, load_expectation_document
from .runtime_settings import ExpectationDocument, OutputSettings

__all__ = [
    "ConfigurationError",
    "ExpectationDocument",
    "ExpectationTagError",
    "OutputSettings",
    "TYPE_NAMES",
    "build_expectation_loader",
    "load_actual_document",
    "load_expectation_document",
]
