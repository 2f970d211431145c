import os
import uvicorn

if __name__ == "__main__":
    # Load settings and export environment first, so the logger picks up
    # the log directory when the app modules are imported below
    from config import settings
    settings.setup_environment()

    os.makedirs(settings.USER_DATA_DIR, exist_ok=True)

    from main import app

    port = int(os.environ.get("RAPMANIA_PORT", settings.RAPMANIA_PORT))

    print(f"Starting Rapmania Backend Server on port {port}...")
    print(f"User Data Directory: {settings.USER_DATA_DIR}")
    print(f"Text generation provider: {settings.LLM_PROVIDER} ({settings.LLM_MODEL})")

    uvicorn.run(app, host="127.0.0.1", port=port, reload=False, workers=1)
