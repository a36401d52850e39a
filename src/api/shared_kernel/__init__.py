"""Shared Kernel module.

Foundational components that are explicitly shared across bounded
contexts. Following Domain-Driven Design principles, the Shared Kernel is
a small, carefully managed set of components that contexts agree to
depend on.
"""
