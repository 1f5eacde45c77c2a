"""
Core cross-cutting concerns: exceptions, logging helpers and HTTP middleware.
"""
