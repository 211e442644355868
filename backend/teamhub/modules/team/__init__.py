"""
Team Module

Team aggregate with membership, invitations, settings and role permissions,
plus the application service and an in-memory repository adapter.
"""
