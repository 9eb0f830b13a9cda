"""linkspan - clickable link spans for chat message rendering.

Package entry point. Exports the version string only; handlers, layout and
platform adapters are imported from their own modules.
"""

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0+unknown"
