"""Presentation layer: the Textual UI that implements the display sink."""
