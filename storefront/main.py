"""
Name: Backend ASGI Entrypoint (storefront.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep this module side-effect free beyond importing storefront.api.main

Notes/Constraints:
  - uvicorn storefront.main:app
  - No configuration or IO should live here
"""

from storefront.api.main import app

__all__ = ["app"]
