# Routes package init
"""
SiteCMS Backend: API Routes Package
====================================

Route Inventory:
    - auth.py:      POST /api/login
    - users.py:     GET/POST /api/users, PUT/DELETE /api/users/{id}
    - services.py:  GET/POST /api/services, PUT/DELETE /api/services/{id}
    - team.py:      GET/POST /api/team, PUT/DELETE /api/team/{id}
    - uploads.py:   POST /api/upload, GET /api/uploads, GET /uploads/{name}
    - health.py:    GET /health

Routes stay thin: they parse the request, call a repository or service
obtained through dependencies, and shape the response. Errors propagate
as application exceptions to the global handlers in main.py.
"""
