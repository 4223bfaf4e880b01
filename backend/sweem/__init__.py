"""Application package for the software delivery management backend.

This package exposes the service, repository and model modules used by
the FastAPI application that tracks clients, projects and users. It is
intentionally lightweight; individual modules contain the concrete
implementations and documentation.
"""
