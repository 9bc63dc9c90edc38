"""
Vercel serverless entrypoint.

Re-exports the FastAPI app so Vercel serves the same application and
middleware stack as `uvicorn smartai.main:app`.
"""

from pathlib import Path
import sys

backend_root = Path(__file__).resolve().parents[1] / "backend"
if str(backend_root) not in sys.path:
    sys.path.insert(0, str(backend_root))

from smartai.main import app  # noqa: E402

__all__ = ["app"]
