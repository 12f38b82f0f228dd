# Schemas package init
"""
CarLookup Backend: Pydantic Request/Response Schemas
=====================================================

All API bodies are camelCase on the wire (`countryOfOrigin`, `modelYear`)
and snake_case in Python. `CamelModel` sets that up once for every schema.
"""
