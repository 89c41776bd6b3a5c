"""Parsing, classification and value normalization of plan JSON."""

from .change_classifier import ChangeClassifier
from .plan_parser import PlanParser, parse_plan
from .value_normalizer import ValueNormalizer

__all__ = [
    "ChangeClassifier",
    "PlanParser",
    "ValueNormalizer",
    "parse_plan",
]
