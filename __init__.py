"""Strip emoji from text while leaving every other code point untouched."""

__version__ = "0.1.0"
