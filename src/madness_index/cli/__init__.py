"""Command-line interface (``madness-index`` / ``python -m madness_index.cli``)."""
