# Routes package init
"""
LinkShelf Backend — API Routes Package
========================================

Route Inventory:
    - links.py:   GET    /api/links
                  GET    /api/links/{id}
                  POST   /api/links
                  PUT    /api/links/{id}
                  DELETE /api/links/{id}
    - folders.py: GET    /api/folders
                  POST   /api/folders
    - health.py:  GET    /api/health

Design Principle:
    Routes are THIN. They declare status codes and response models,
    call one service method, and let application exceptions propagate
    to the global handlers in main.py.
"""
