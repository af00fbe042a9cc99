"""HTTP services of the Rifa Service.

:mod:`rifa_service.services.common` holds the plumbing shared by all services:
the Flask app factory, JSON error handling, schemas and RED metrics.
"""
