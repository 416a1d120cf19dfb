"""
Pipeline services: color stages, imaging adapter and observability.
"""
