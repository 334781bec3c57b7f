"""Output layer: CRD-name projection and flag formatting."""

from crdorder.output.formatting import DEFAULT_FLAG_NAME, format_order
from crdorder.output.projection import project_crd_names

__all__ = ["DEFAULT_FLAG_NAME", "format_order", "project_crd_names"]
