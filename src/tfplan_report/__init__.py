"""Render Terraform plan JSON as a pull-request friendly change summary."""

__version__ = "0.1.0"
