"""Microdot - an editor for small labelled directed graphs.

Package layout:
- graph/: Graph command engine, label micro-language, typed values, storage
- analysis/: Path enumeration and cost analysis
- export/: Exporter contract, JSON persistence, graphviz notation
- config/: Configuration schema and loader
- cli/: Batch command-line commands
"""

__version__ = "0.1.0"
