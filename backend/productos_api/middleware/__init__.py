"""
Productos API: Middleware Package
==================================

Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route
"""
