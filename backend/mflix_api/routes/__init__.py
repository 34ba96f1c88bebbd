# Routes package init
"""
Mflix API - API Routes Package
===============================

Route Inventory:
    - movies.py:    /api/movies, /api/movies/{movie_id}
    - comments.py:  /api/movies/{movie_id}/comments[/{comment_id}]
    - theaters.py:  /api/theaters, /api/theaters/{theater_id}
    - health.py:    GET /health
    - dispatch.py:  405 operations for unsupported verbs

Routes are thin: extract path parameters and the typed body, call the
resource service, render the envelope. Validation, queries and status
selection belong to the services.
"""
