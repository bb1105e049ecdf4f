"""
Incremental-build cache for the documentation generator.

Keeps parsed markdown, core-doc, partial, typedoc and tooltip artifacts in
memory across repeated builds and evicts them when their source files change.
"""

__version__ = "0.1.0"
