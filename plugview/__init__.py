"""View trees, selectors, manifests, trust checks and authoring interfaces for UI plugins."""

__version__ = "0.1.0"