"""Run the Shootplan web application with uvicorn."""
import uvicorn

from shootplan.core.config import settings

if __name__ == "__main__":
    uvicorn.run("shootplan.main:app", host=settings.host, port=settings.port)
