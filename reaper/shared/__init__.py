"""Shared utilities: telemetry, datetime helpers and cross-cutting concerns.

Used by domain, application, and infrastructure. No business logic.
"""
