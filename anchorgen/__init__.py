"""Generate Rust CPI client source for Anchor programs from a JSON IDL."""

__version__ = "0.4.1"