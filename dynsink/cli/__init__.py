"""Dynsink CLI — Typer-based command-line interface.

Provides the ``dynsink`` command with subcommands for routing event files,
previewing template resolution, and listing output formats.

All output uses Rich for formatted terminal display.
"""
