"""Data models for decoded Terraform plans and rendered reports."""

from .report import PlanReport
from .resource import ChangeAction, Plan, ResourceChange

__all__ = [
    "ChangeAction",
    "Plan",
    "PlanReport",
    "ResourceChange",
]
