"""Command-line interface package for plan reports."""

from .app import (
    OUTPUT_FORMATS,
    build_parser,
    create_service,
    load_settings,
    main,
    run,
)

__all__ = [
    "OUTPUT_FORMATS",
    "build_parser",
    "create_service",
    "load_settings",
    "main",
    "run",
]
