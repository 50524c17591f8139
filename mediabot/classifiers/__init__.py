"""Classification of upstream failures into user-facing messages."""
from mediabot.classifiers.error_catalog import (
    DEFAULT_ERROR_CATALOG,
    ErrorCatalog,
    ErrorCategory,
    TextRule,
    catalog_from_dict,
    load_error_catalog,
)
from mediabot.classifiers.error_classifier import (
    ErrorClassification,
    ErrorClassifier,
    ErrorClassifierProtocol,
    FakeErrorClassifier,
)
from mediabot.classifiers.exceptions import ErrorCatalogError

__all__ = [
    "DEFAULT_ERROR_CATALOG",
    "ErrorCatalog",
    "ErrorCatalogError",
    "ErrorCategory",
    "ErrorClassification",
    "ErrorClassifier",
    "ErrorClassifierProtocol",
    "FakeErrorClassifier",
    "TextRule",
    "catalog_from_dict",
    "load_error_catalog",
]
