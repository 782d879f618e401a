"""
FixNexus Backend: Services Layer
==================================

Service Inventory:
    - DocumentStore (document_store.py): per-collection MongoDB operations
    - TokenService (token_service.py): JWT issue/validate
    - search.py: serviceName search filter and page → skip/limit
"""
