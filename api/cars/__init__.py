"""
Car catalog: REST resource, CRUD service, criteria query service.
"""
