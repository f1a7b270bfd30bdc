"""
Run the FastAPI backend server.
"""

import uvicorn

from umpire_planner.core.config import API_HOST, API_PORT

if __name__ == "__main__":
    print("=" * 60)
    print("Umpire Planner API Server")
    print("=" * 60)
    print(f"Starting server on http://{API_HOST}:{API_PORT}")
    print(f"API Documentation: http://{API_HOST}:{API_PORT}/docs")
    print("=" * 60)

    uvicorn.run(
        "umpire_planner.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=True,
        log_level="info"
    )
