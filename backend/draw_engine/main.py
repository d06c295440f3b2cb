from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from draw_engine import __version__
from draw_engine.config import configure_logging, cors_origins
from draw_engine.routes import draws

app = FastAPI(title="Padel Draw Engine API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(draws.router, prefix="/api", tags=["draws"])


@app.on_event("startup")
def on_startup():
    configure_logging()


@app.get("/api/health")
def health_check():
    return {"app_name": "Padel Draw Engine API", "version": __version__, "status": "healthy"}
