"""Bubble Quiz - Simple launcher."""
import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "bubblequiz.main:create_app",
        factory=True,
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "8000")),
        reload=os.environ.get("ENV", "development") != "production",
    )
