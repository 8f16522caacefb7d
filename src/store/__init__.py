"""Local content graph storage.

This package persists emitted nodes and downloaded asset files under
the data root and serves them back to the SDK and CLI.
"""
