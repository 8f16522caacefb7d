"""Record transforms.

This package holds the pure per-record transforms applied before a
node is emitted: slug synthesis and node identity derivation.
"""
