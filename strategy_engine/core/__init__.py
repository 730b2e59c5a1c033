"""
Core domain models, numeric primitives, and invariants.

This module contains the foundational building blocks that are independent
of external systems (RPC nodes, token registries, etc.).
"""
