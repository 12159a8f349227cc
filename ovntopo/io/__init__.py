"""Bundle file input."""

from ovntopo.io.loader import inputs_from_bundle, load_bundle, load_bundle_yaml

__all__ = ["inputs_from_bundle", "load_bundle", "load_bundle_yaml"]
