"""Entry point for `python -m crdorder`.

Usage:
    python -m crdorder crds
    uv run python -m crdorder order --ignore-group example.com
"""

from __future__ import annotations

from crdorder.cli import cli

cli(prog_name="crdorder")
