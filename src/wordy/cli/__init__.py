"""
Wordy Command-Line Interface
============================

This package provides the command-line tool for the Wordy toolchain:

- **wordyc**: Wordy to C translator

The tool is a Click-based CLI application with built-in help and
consistent exit codes (see wordy.cli.errors.ExitCode).
"""

__all__ = ["wordyc"]
