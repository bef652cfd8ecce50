"""
Endpoint services, one module per area of the Bixo API.

Each function takes an ``ApiClient`` first and returns an ``ApiResponse``
whose ``data`` is already parsed into the matching schema.
"""
