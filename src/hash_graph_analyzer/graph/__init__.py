"""Functional graph primitives: the truncated hash map and rho detection."""
