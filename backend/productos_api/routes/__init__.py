"""
Productos API: Routes Package
==============================

Route Inventory:
    - productos.py:  GET    /api/productos
                     GET    /api/productos/{id}
                     GET    /api/productos/categoria/{categoria}
                     POST   /api/productos
                     PUT    /api/productos/{id}
                     PATCH  /api/productos/{id}/stock
                     DELETE /api/productos/{id}
    - health.py:     GET    /health

Routes stay thin: extract request data, call the service, shape the
response. Business rules live in services.
"""
