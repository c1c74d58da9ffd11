"""
Brand Compliance Engine
========================
Marketing asset validation against a brand's codified rules.

Checks content assets (colors, fonts, copy, platform posts) against a
Brand Genome and optional Campaign Blueprint overrides, and pins the
engine's behavior with a declarative golden-test corpus.
"""

__version__ = "0.1.0"
