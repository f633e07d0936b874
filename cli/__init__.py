"""
Scriptura - Command Line Interface

Main CLI entry point for catalog lookup, conversion and validation.
"""
from cli.main import app, main

__all__ = ["app", "main"]
