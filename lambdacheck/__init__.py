"""Syntax tree, scope checking, currying and tree printing for a small lambda-calculus language,
with the hash map and arena allocator it comes with."""

__version__ = "0.1.0"