# meditrack/main.py
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

load_dotenv()

from meditrack.config import settings
from meditrack.database import close_client, get_client, init_db

# Routers
from meditrack.routes.auth import router as auth_router
from meditrack.routes.camps import router as camps_router
from meditrack.routes.registrations import router as registrations_router
from meditrack.routes.users import router as users_router
from meditrack.routes.feedback import router as feedback_router
from meditrack.routes.payments import router as payments_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(get_client()[settings.DB_NAME])
    logger.info("Connected to MongoDB database %s", settings.DB_NAME)
    yield
    close_client()


app = FastAPI(title="MediTrack API", version="1.0.0", lifespan=lifespan)

# CORS Configuration; bearer tokens travel in the Authorization header
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Malformed bodies and query parameters are client errors (400)
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": exc.errors()}),
    )


# Driver failures are logged in full and reported opaquely
@app.exception_handler(PyMongoError)
async def database_exception_handler(request: Request, exc: PyMongoError):
    logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Register routers
app.include_router(auth_router)
app.include_router(camps_router)
app.include_router(registrations_router)
app.include_router(users_router)
app.include_router(feedback_router)
app.include_router(payments_router)


@app.get("/")
def read_root():
    return {"message": "MediTrack server is running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
