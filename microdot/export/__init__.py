"""Exporters that walk a Graph: JSON persistence and Graphviz DOT.

Import the concrete exporters from their modules; ``microdot.graph`` depends
on ``microdot.export.base`` so this package stays import-free.
"""
