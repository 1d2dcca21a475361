"""HTTP API for GrugTok."""

from grugtok.api.app import create_app

__all__ = ["create_app"]
