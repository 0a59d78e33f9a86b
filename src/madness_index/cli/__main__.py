"""Allow ``python -m madness_index.cli``."""

from madness_index.cli.main import app

app()
