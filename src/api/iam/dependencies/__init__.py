"""FastAPI dependencies for IAM bounded context.

Composes infrastructure resources (database sessions) with IAM-specific
components (repositories, services) and resolves the request's tenant.
"""
