"""crdorder command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``crdorder`` script).
"""

from crdorder.cli.main import cli

__all__ = ["cli"]
