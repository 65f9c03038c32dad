"""
Service layer.

Each service encapsulates business logic for a domain and receives
its collaborators through the constructor.  Services return
``core.errors.Result`` values; they never build HTTP responses.
"""
