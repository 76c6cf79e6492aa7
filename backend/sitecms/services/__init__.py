# Services package init
"""
SiteCMS Backend: Services Layer
================================

Service Inventory:
    - schema_service: Schema manager (tables + additive column migration)
    - seed_service:   Seed loader (admin account, default services and team)
    - file_service:   Upload storage, listing and retrieval
    - auth_service:   Authenticator interface and the plaintext implementation
"""
