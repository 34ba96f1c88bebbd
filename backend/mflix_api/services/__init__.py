# Services package init
"""
Mflix API - Services Layer
===========================

What:  Resource handlers and the store abstraction they run on.

Service Inventory:
    - Store (abstract):   document store capability (store_base.py)
    - MongoStore:         Motor implementation (mongo_store.py)
    - identifiers:        ObjectId path validation
    - ResourceLocator:    filters for single documents and capped listings
    - ResourceService:    shared validate → query → store → envelope skeleton
    - MovieService, CommentService, TheaterService: one per resource family
"""
