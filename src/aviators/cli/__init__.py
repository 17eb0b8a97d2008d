"""
Command-line layer for aviators.

Command modules hold plain functions; main.py registers them on the root
Typer app.
"""
