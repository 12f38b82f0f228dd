# Routes package init
"""
CarLookup Backend: API Routes Package
======================================

Route Inventory:
    - auth.py:        POST /api/v1/auth/token
    - car_makes.py:   /api/v1/carmakes (list, get, models-of-make, create, update, delete)
    - car_models.py:  /api/v1/carmodels (get, create, update, delete)
    - health.py:      GET  /health

Design Principle:
    Routes are THIN. They read parameters, call a manager and wrap the
    result in the envelope. Business rules and error decisions live in the
    managers and the exception mapping chain.
"""
