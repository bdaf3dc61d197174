"""Domain layer: path lookup, rule specs, and rule checks.

This layer depends only on stdlib, pydantic, and email-validator.
It must never import from services, commands, or config.
"""
