"""Turnero package.

This package is organized by feature modules (users, rooms, shifts, invitations)
with a thin Flask controller layer and service/repository layers. Repositories
talk to the external REST backend through ``backend.client.BackendClient``.
"""
