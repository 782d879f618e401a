"""
FixNexus Backend: API Routes Package
======================================

Route Inventory:
    - health.py:           GET /, GET /health
    - auth.py:             POST /jwt, GET /logout
    - services.py:         /home-services, /services, /services-count,
                           /services/{id}, /manage-services/{email}
    - booked_services.py:  /booked-services, /booked-services/{email|id},
                           /services-to-do/{email}

Routes stay thin: pull parameters, run the ownership check where needed,
call one DocumentStore operation, return its result.
"""
