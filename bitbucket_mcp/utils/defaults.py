"""
Utilities - Defaults

Shared defaults for list and search operations.
"""

from typing import Any, Dict, TypeVar

from pydantic import BaseModel

DEFAULT_PAGE_SIZE = 25

ModelT = TypeVar("ModelT", bound=BaseModel)


def apply_defaults(options: ModelT, defaults: Dict[str, Any]) -> ModelT:
    """
    Fill fields the caller left unset.

    Explicit caller values always win. Returns a new model and leaves
    `options` untouched, so applying the same defaults twice is a no-op.

    Args:
        options: Caller-supplied options
        defaults: Field name to default value

    Returns:
        Copy of options with defaults applied
    """
    update = {
        name: value
        for name, value in defaults.items()
        if getattr(options, name, None) is None
    }
    if not update:
        return options.model_copy()
    return options.model_copy(update=update)
