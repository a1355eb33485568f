"""Command plugins. Every module here defining a `command` is picked up by colour_swatch.registry."""
