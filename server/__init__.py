"""HTTP surface for Uno Room."""
