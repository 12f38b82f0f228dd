# Services package init
"""
CarLookup Backend: Services Layer
==================================

Stateless helpers shared by the managers. Each takes its configuration in
the constructor (with a `from_settings` shortcut) so tests can build them
with explicit values.

Service Inventory:
    - PaginationService: clamp page/limit, build page info and links
    - PasswordService:   PBKDF2 hashing, salt generation, verification
    - TokenService:      JWT issue/validate/read-claims
"""
