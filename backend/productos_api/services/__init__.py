"""
Productos API: Services Layer
==============================

Sits between routes (HTTP) and the database.

Service Inventory:
    - ProductService: product persistence (find, save, update, delete)
"""
