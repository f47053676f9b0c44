"""
infrastructure - Concrete implementations of domain ports.

Contains all vendor-specific code: the completion API client, SQLite
persistence and environment configuration.
Depends on domain/ only (implements ports). Never imported by application/.
"""
