import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.config import get_settings
from app.core.context import AppContext, build_context
from app.core.errors import register_error_handlers
from app.db.session import init_db

from app.api.auth.routes import router as auth_router
from app.api.todo.project.routes import router as todo_project_router
from app.api.todo.task.routes import router as todo_task_router
from app.api.todo.comment.routes import router as comment_router
from app.api.files.routes import router as files_router

logger = logging.getLogger(__name__)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    if context is None:
        context = build_context(get_settings())
    settings = context.settings

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(context.engine)
        logger.info("Database ready at %s", context.engine.url.render_as_string(hide_password=True))
        yield
        context.engine.dispose()

    app = FastAPI(title="Task Manager API", lifespan=lifespan)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # Routers
    prefix = settings.API_PREFIX
    app.include_router(auth_router, prefix=prefix, tags=["Auth"])
    app.include_router(todo_project_router, prefix=prefix, tags=["Projects"])
    app.include_router(todo_task_router, prefix=prefix, tags=["Tasks"])
    app.include_router(comment_router, prefix=prefix, tags=["Comments"])
    app.include_router(files_router, prefix=prefix, tags=["Files"])

    app.mount(f"{prefix}/uploads", StaticFiles(directory=context.files.upload_dir), name="uploads")

    @app.get("/ping")
    def ping():
        return {"message": "pong"}

    return app
