"""
ASGI entrypoint: expose `app` for process managers / deployments.

- En production, un process manager (uvicorn, gunicorn + UvicornWorker) importe `eventpay.asgi:app`.
- La configuration FastAPI est centralisée dans eventpay.app_setup.factory.
"""

from eventpay.app import app
