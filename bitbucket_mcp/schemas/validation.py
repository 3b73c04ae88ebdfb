"""
Schemas - Argument Validation

Turns pydantic validation failures into structured issues instead of
exceptions. Callers decide whether to raise or show a message.
"""

from typing import Any, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class ValidationIssue(BaseModel):
    """A single rejected argument."""
    path: List[Union[str, int]] = []
    message: str


def validate_args(
    model: Type[ModelT],
    payload: Mapping[str, Any],
) -> Tuple[Optional[ModelT], List[ValidationIssue]]:
    """
    Validate raw arguments against a schema.

    Args:
        model: Argument schema
        payload: Raw option bag from the CLI or tool transport

    Returns:
        (instance, []) on success, (None, issues) on failure
    """
    try:
        return model.model_validate(dict(payload)), []
    except ValidationError as exc:
        issues = [
            ValidationIssue(path=list(err["loc"]), message=err["msg"])
            for err in exc.errors()
        ]
        return None, issues


def format_validation_issues(issues: List[ValidationIssue]) -> str:
    """Render issues as an in-band error message."""
    lines = ["Error: Invalid arguments:"]
    for issue in issues:
        path = ".".join(str(part) for part in issue.path)
        lines.append(f"- {path}: {issue.message}" if path else f"- {issue.message}")
    return "\n".join(lines)
