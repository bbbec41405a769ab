"""midivault - a local content store for published MIDI bundles."""

__version__ = "0.1.0"
