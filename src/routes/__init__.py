"""
API Routes Package
==================
Shared pieces for the FastAPI handlers in api.py.

Modules:
  helpers  - pipeline access, payload serialization, timezone validation
"""
