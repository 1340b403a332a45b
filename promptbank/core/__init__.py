"""Core schemas shared across layers."""
