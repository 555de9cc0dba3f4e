"""Service layer: business rules and transaction boundaries.

Import services from their modules, e.g.
`from src.portfolio.services.project_service import ProjectService`.
"""
