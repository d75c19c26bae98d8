import time
from datetime import datetime, timezone
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .core.database import create_db_and_tables
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .core.settings import settings
from .models.User import User # Import models to register them with SQLModel
from .models.Project import Project
from .models.Skill import Skill
from .models.BlogPost import BlogPost
from .models.Collaborator import Collaborator
from .models.HomeContent import HomeContent
from .models.Experience import Experience
from .models.Education import Education

from .auth.router import router as auth_router
from .projects.router import router as projects_router
from .skills.router import router as skills_router
from .blog.router import router as blog_router
from .profile.router import router as profile_router
from .collaborators.router import router as collaborators_router
from .home_content.router import router as home_content_router

START_TIME = time.monotonic()

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = setup_logging(settings.LOG_LEVEL)
    create_db_and_tables()
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)
    yield



app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(projects_router)
app.include_router(skills_router)
app.include_router(blog_router)
app.include_router(profile_router)
app.include_router(collaborators_router)
app.include_router(home_content_router)

@app.get("/")
def read_root():
    return {"message": f"{settings.PROJECT_NAME} API Server", "version": settings.VERSION, "status": "running"}

@app.get("/api/health")
def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - START_TIME, 3),
    }
