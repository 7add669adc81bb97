"""Service layer — pipeline steps and the runner returning ServiceResult.

Services may import from errors, config, and infrastructure.
They must never import from commands or output.
"""
