"""Mounts the v1 endpoint routers under /api/v1."""

from fastapi import APIRouter

from docflow.api.v1.endpoints import document_types, documents, health

api_router = APIRouter()

for router, prefix, tag in (
    (health.router, "/health", "health"),
    (document_types.router, "/document-types", "document-types"),
    (documents.router, "/documents", "documents"),
):
    api_router.include_router(router, prefix=prefix, tags=[tag])
