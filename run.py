import uvicorn

from app.config import get_settings

settings = get_settings()

# Determine environment: "prod" or "local"
ENV = settings.ENV.lower()

HOST = settings.HOST
PORT = settings.PORT
RELOAD = True  # Enable live reload in local development

# Production config
if ENV == "prod":
    HOST = "0.0.0.0"
    RELOAD = False  # Disable reload in production
else:
    print("[Info] Running in local mode with auto-reload.")

# Start the FastAPI app
if __name__ == "__main__":
    uvicorn.run("app.main:create_app", factory=True, host=HOST, port=PORT, reload=RELOAD)
