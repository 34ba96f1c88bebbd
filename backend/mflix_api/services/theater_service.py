"""
Mflix API - Theater Service
============================

What:  Resource handler for the `theaters` collection. Same shape as movies,
       with no nested resource.
"""

from mflix_api.services.resource_service import ResourceService


class TheaterService(ResourceService):
    collection = "theaters"
    resource = "theater"
    plural = "theaters"
