import os
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from bazaar.routers import auth_router, user_router, friend_router, collection_router, label_router
from bazaar.models import init_db

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

# FastAPI app with Swagger UI metadata
app = FastAPI(
    title="Bazaar",
    description="Backend for the **Bazaar** social marketplace.\n\n"
                "Accounts and sessions, friend requests and friendships, "
                "saved-post collections and post labels.",
    version="0.1.0"
)

# Flatten pydantic validation errors into a single 400 message
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    error_messages = []
    for error in errors:
        field = " -> ".join(str(loc) for loc in error["loc"])
        message = error.get("msg", "Validation error")
        error_messages.append(f"{field}: {message}")

    detail = "; ".join(error_messages) if error_messages else "Invalid request data"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail}
    )

# Connect to the database on startup
@app.on_event("startup")
async def startup_db_client():
    await init_db()

# Routers
app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(user_router.router, prefix="/api/users", tags=["Users"])
app.include_router(friend_router.router, prefix="/api/friends", tags=["Friends"])
app.include_router(collection_router.router, prefix="/api/collections", tags=["Collections"])
app.include_router(label_router.router, prefix="/api/labels", tags=["Labels"])

@app.get("/")
def read_root():
    return {"message": "Server is running"}
