from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from bookflix import config
from bookflix.db import get_db
from bookflix.errors import install_error_handlers
from bookflix.api.auth import router as auth_router
from bookflix.api.books import router as books_router
from bookflix.api.movies import router as movies_router
from bookflix.api.adaptations import router as adaptations_router
from bookflix.api.analytics import router as analytics_router

app = FastAPI(title="BookFlix API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.FRONTEND_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

install_error_handlers(app)

app.include_router(auth_router)
app.include_router(books_router)
app.include_router(movies_router)
app.include_router(adaptations_router)
app.include_router(analytics_router)

@app.get("/")
def root():
    return {"message": "BookFlix API is up. Try /health or /db-ping or /docs."}

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    version = db.execute(text("select version()")).scalar()
    return {"db": "ok", "version": version}
