"""
Service layer.

Each service encapsulates the business logic for a domain so the API
handlers only deal with request parsing and status codes.
"""
