from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError

from archmap import __version__
from archmap.api.routes import router
from archmap.db.session import engine
from archmap.db.models import Base

app = FastAPI(
    title="Architecture Diagram Generator",
    version=__version__,
)

# Middleware FIRST
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes AFTER middleware
app.include_router(router)


@app.on_event("startup")
def startup():
    try:
        Base.metadata.create_all(bind=engine)
        print("[DB] ✅ Database ready")
    except OperationalError as e:
        # Generations are still served, just not recorded
        print(f"[DB] ⚠️ Database not ready, running without persistence: {e}")
