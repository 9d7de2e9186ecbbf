"""Validates candidate plans against the canonical schema.

Pydantic does the checking; this module turns its error list into
field-qualified messages that read like the constraint that failed
(``price.monthly: Monthly price must be positive``).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ValidationError

from vps_catalog.schemas.normalized import NormalizedPlan

CONSTRAINT_MESSAGES: Dict[Tuple[str, ...], str] = {
    ("id",): "ID is required",
    ("provider",): "Provider name is required",
    ("name",): "Plan name is required",
    ("price", "monthly"): "Monthly price must be positive",
    ("price", "yearly"): "Yearly price must be positive",
    ("price", "currency"): "Currency must be USD, EUR, or GBP",
    ("specs", "cpu", "cores"): "CPU cores must be a positive integer",
    ("specs", "cpu", "type"): "CPU type must be vCPU, CPU, or Core",
    ("specs", "ram", "amount"): "RAM amount must be positive",
    ("specs", "ram", "unit"): "RAM unit must be MB, GB, or TB",
    ("specs", "storage", "amount"): "Storage amount must be positive",
    ("specs", "storage", "unit"): "Storage unit must be GB or TB",
    ("specs", "storage", "type"): "Storage type must be SSD, NVMe, HDD, or EBS",
    ("specs", "bandwidth", "amount"): "Bandwidth amount must be non-negative",
    ("specs", "bandwidth", "unit"): "Bandwidth unit must be GB or TB",
    ("features",): "At least one feature is required",
    ("locations",): "At least one location is required",
    ("uptime", "percentage"): "Uptime percentage must be between 0 and 100",
    ("support",): "Support information is required",
    ("website",): "Website must be a valid URL",
}


class FieldError(BaseModel):
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class ValidationErrorSet(BaseModel):
    """All constraint violations found in one candidate record."""

    plan_id: Optional[str] = None
    errors: List[FieldError]

    def __str__(self) -> str:
        label = self.plan_id or "<unknown plan>"
        return f"{label}: " + "; ".join(str(error) for error in self.errors)


def format_path(loc: Tuple[Union[str, int], ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else part
    return path or "(root)"


def _message_for(error: Dict[str, Any]) -> str:
    loc = tuple(error["loc"])
    if error["type"] == "missing" or error.get("input", ...) is None:
        return "Required"
    # wrong type: pydantic says which type it wanted
    if error["type"].endswith("_type"):
        return error["msg"]
    if loc in CONSTRAINT_MESSAGES:
        return CONSTRAINT_MESSAGES[loc]
    return error["msg"]


def validate_plan(candidate: Any) -> Union[NormalizedPlan, ValidationErrorSet]:
    """Return the validated plan, or every field error found in ``candidate``.

    Defaults are filled for absent optional fields; values that are present
    but out of range are reported, never corrected.
    """
    if isinstance(candidate, NormalizedPlan):
        return candidate

    try:
        return NormalizedPlan.model_validate(candidate)
    except ValidationError as exc:
        plan_id = candidate.get("id") if isinstance(candidate, dict) else None
        return ValidationErrorSet(
            plan_id=plan_id if isinstance(plan_id, str) else None,
            errors=[
                FieldError(path=format_path(tuple(error["loc"])), message=_message_for(error))
                for error in exc.errors()
            ],
        )
