"""Verification gates of the product enrichment pipeline.

Gates are checkpoints that each return a pass/fail result plus the evidence
behind it. This package currently ships Gate 4 (cross-source truth
verification) in ``cross_source``.
"""
