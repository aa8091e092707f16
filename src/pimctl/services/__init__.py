"""Service layer — policy operations returning ServiceResult.

Services may import from config, policy and errors.
They must never import from commands or output.
"""
