"""HTTP surface for the prompt library."""
