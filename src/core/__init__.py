"""
Core domain models, mathematical primitives, configuration and contracts.

Independent of any external system (web layer, databases, narrative
generation): everything here is pure and deterministic.
"""
