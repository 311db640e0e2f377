"""API routes."""

from app.api import graph, kinship, persons, relationships
from fastapi import APIRouter

api_router = APIRouter()

# Include sub-routers
api_router.include_router(kinship.router, prefix="/kinship", tags=["kinship"])
api_router.include_router(persons.router, prefix="/person", tags=["persons"])
api_router.include_router(relationships.router, prefix="/relationships", tags=["relationships"])
api_router.include_router(graph.router, prefix="/graph", tags=["graph"])
