"""vpassport - digital vehicle passport viewer and verifier."""

__version__ = "0.1.0"
