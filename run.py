"""
Run the API server on port 3001 (or $PORT).
Usage: python3 run.py   (from the repository root)
"""
import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", 3001)),
        reload=os.environ.get("RELOAD", "false").lower() in {"1", "true", "yes"},
    )
