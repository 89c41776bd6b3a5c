from __future__ import annotations

import pytest

from tfplan_report.adapters import DEFAULT_REDACTED_VALUE, PlanSanitizer, sanitize_plan
from tfplan_report.errors import SanitizeError
from tfplan_report.models import Plan, ResourceChange


def make_plan(**change_fields) -> Plan:
    change = ResourceChange(
        address="aws_db_instance.main",
        type="aws_db_instance",
        name="main",
        actions=("update",),
        **change_fields,
    )
    return Plan(resource_changes=[change])


def test_redacts_values_marked_sensitive() -> None:
    plan = make_plan(
        before={"password": "hunter2", "engine": "postgres"},
        after={"password": "correct-horse", "engine": "postgres"},
        before_sensitive={"password": True},
        after_sensitive={"password": True, "engine": False},
    )

    sanitized = sanitize_plan(plan)

    change = sanitized.resource_changes[0]
    assert change.before == {"password": DEFAULT_REDACTED_VALUE, "engine": "postgres"}
    assert change.after == {"password": DEFAULT_REDACTED_VALUE, "engine": "postgres"}


def test_recurses_into_nested_masks() -> None:
    plan = make_plan(
        after={
            "settings": [{"token": "abc", "name": "x"}, {"token": "def", "name": "y"}],
            "tags": {"owner": "ops"},
        },
        after_sensitive={"settings": [{"token": True}, {}], "tags": True},
    )

    change = PlanSanitizer("***").sanitize(plan).resource_changes[0]

    assert change.after == {
        "settings": [{"token": "***", "name": "x"}, {"token": "def", "name": "y"}],
        "tags": "***",
    }


def test_whole_value_sensitive() -> None:
    plan = make_plan(before="secret", after=None, before_sensitive=True, after_sensitive=True)

    change = PlanSanitizer()(plan).resource_changes[0]

    assert change.before == DEFAULT_REDACTED_VALUE
    assert change.after == DEFAULT_REDACTED_VALUE


def test_does_not_mutate_input_plan() -> None:
    plan = make_plan(after={"password": "hunter2"}, after_sensitive={"password": True})

    sanitize_plan(plan)

    assert plan.resource_changes[0].after == {"password": "hunter2"}


def test_invalid_mask_raises() -> None:
    plan = make_plan(after={"password": "hunter2"}, after_sensitive={"password": "yes"})

    with pytest.raises(SanitizeError, match="aws_db_instance.main"):
        sanitize_plan(plan)


def test_sensitive_null_is_still_redacted() -> None:
    plan = make_plan(before={"token": None}, before_sensitive={"token": True})

    change = sanitize_plan(plan).resource_changes[0]

    assert change.before == {"token": DEFAULT_REDACTED_VALUE}
