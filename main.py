import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.errors import register_error_handlers
from core.firebase import initialize_firebase
from api.v1 import auth, income, expenses

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    initialize_firebase()
    yield


app = FastAPI(title="SpendX", version="1.0.0", lifespan=lifespan)

# Налаштування CORS: cookie дозволені лише для origin-ів зі списку
origins = [o.strip() for o in settings.FRONTEND_ORIGIN.split(",") if o.strip()] or [
    "http://localhost:3000",
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

register_error_handlers(app)

# --- ПІДКЛЮЧЕННЯ РОУТЕРІВ ---
app.include_router(auth.router, prefix=settings.API_PREFIX, tags=["Auth"])
app.include_router(income.router, prefix=settings.API_PREFIX, tags=["Income"])
app.include_router(expenses.router, prefix=settings.API_PREFIX, tags=["Expenses"])


@app.get("/")
def read_root():
    return {"status": "ok", "version": app.version}
