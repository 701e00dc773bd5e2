"""Command-line interface for the dailybias learning scheduler."""
