"""crdorder: restore ordering for custom resources derived from ownerReferences."""

__version__ = "0.1.0"
