"""Run the API with a development server: ``python -m transitie``."""
from __future__ import annotations

import os

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "transitie.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "false").lower() == "true",
    )
