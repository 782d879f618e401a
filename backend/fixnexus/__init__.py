"""
FixNexus Backend: Application Package
=======================================

Layered layout:

    ┌─────────────────────────────────────┐
    │   Routes (API Layer)                │  ← HTTP verbs/paths, ownership checks
    ├─────────────────────────────────────┤
    │   Dependencies (Auth Gate)          │  ← token cookie → claims
    ├─────────────────────────────────────┤
    │   Services                          │  ← token service, search, document store
    ├─────────────────────────────────────┤
    │   Database (MongoDB client)         │  ← lifespan-managed, injected per request
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
