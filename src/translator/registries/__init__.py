"""Registry modules for declarative mappings."""

from .actions import (
    ACTION_CATALOG,
    DOCUMENT_ACTIONS,
    get_action_type,
    get_document_action,
    list_actions,
)
from .locators import SELECTOR_VALIDATORS, selector_annotation, validate_selector
from .matchers import MATCHERS, get_matcher

__all__ = [
    "ACTION_CATALOG",
    "DOCUMENT_ACTIONS",
    "MATCHERS",
    "SELECTOR_VALIDATORS",
    "get_action_type",
    "get_document_action",
    "get_matcher",
    "list_actions",
    "selector_annotation",
    "validate_selector",
]
