import logging

import uvicorn

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from routers import auth, employee, leave_management, holidays, notifications
from config import settings

PROD_MODE = settings.PRODUCTION_MODE

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)

app = FastAPI(title=settings.PROJECT_TITLE)

app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(employee.router, prefix="/employee", tags=["employee"])
app.include_router(leave_management.router, prefix="/leave-management", tags=["leave_management"])
app.include_router(holidays.router, prefix="/holidays", tags=["holidays"])
app.include_router(notifications.router, prefix="/notifications", tags=["notifications"])

# Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def index():
    return {"message": "Hello LeafMS"}


if __name__ == "__main__":
    if PROD_MODE == True:
    # Run Uvicorn without reload in production
        uvicorn.run("main:app", host="0.0.0.0", port=11000, reload=False)

    else:
        # Run Uvicorn with reload=True in development mode
        uvicorn.run("main:app", host="0.0.0.0", port=11000, reload=True)
