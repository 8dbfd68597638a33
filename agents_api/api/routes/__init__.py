from fastapi import FastAPI

from .agents import router as agents_router

def register_routes(app: FastAPI):
    app.include_router(agents_router, prefix="/api/v1")
