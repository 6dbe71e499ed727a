"""
python -m eventpay: lance uvicorn sur eventpay.asgi:app.

Variables: HOST (0.0.0.0), PORT (8000), UVICORN_RELOAD ("1"/"true"/"yes"), LOG_LEVEL (info).
"""
import os

import uvicorn

def _flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")

def main() -> None:
    uvicorn.run(
        "eventpay.asgi:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", 8000)),
        reload=_flag("UVICORN_RELOAD"),
        log_level=os.environ.get("LOG_LEVEL", "info").lower(),
    )

if __name__ == "__main__":
    main()
