"""Route registration: every quiz router shares one versioned prefix."""

from fastapi import FastAPI

from reading_quiz_server.routes.questions import router as questions_router
from reading_quiz_server.routes.results import router as results_router
from reading_quiz_server.routes.sessions import router as sessions_router

_ROUTERS = (sessions_router, questions_router, results_router)


def register_routes(app: FastAPI, prefix: str) -> None:
    for router in _ROUTERS:
        app.include_router(router, prefix=prefix)
