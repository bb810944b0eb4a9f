"""
Service layer: domain services, the OAuth bridge and authorization helpers.
"""
