"""Core types and exceptions shared by all modules."""
