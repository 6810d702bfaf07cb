# schema_scout/__init__.py
"""
SchemaScout package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

# Expose CLI entry point; ``schema_scout.cli`` stays the module
from schema_scout.cli import cli as main_cli
