"""Serve the API: `python main.py` (host and port come from HOST/PORT settings)."""
import uvicorn

from goods_transport.core.config import settings
from goods_transport.main import app


def run_http():
    print(f"Starting Goods Transport Back Office on {settings.HOST}:{settings.PORT}...")
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)


if __name__ == "__main__":
    run_http()
