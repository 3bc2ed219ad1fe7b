import os
import uvicorn

if __name__ == "__main__":
    host = os.environ.get("TASKBOARD_HOST", "127.0.0.1")
    port = int(os.environ.get("TASKBOARD_PORT", "8000"))

    print(f"🚀 Starting Taskboard on http://{host}:{port} "
          f"(backend: {os.environ.get('TASKBOARD_API_BASE_URL', 'http://localhost:8080')})")
    uvicorn.run("taskboard.main:app", host=host, port=port, reload=False)
