"""colour_swatch.core: Foundation layer.

Contains the error taxonomy, types, colour parsing, settings access,
image loading, the mask asset, SwatchConfig and the report builder.
This module has NO dependencies on colour_swatch.commands or
colour_swatch.registry. Only stdlib, numpy, and PIL are allowed here.
"""
