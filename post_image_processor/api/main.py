# Load environment variables from .env file first, before any other imports
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from post_image_processor.api.routes import events

app = FastAPI(title="Post Image Processor", version="1.0.0")

app.include_router(events.router, prefix="/events", tags=["events"])


@app.get("/health")
def health_check():
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
