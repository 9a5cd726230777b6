"""Liveness endpoint."""

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    """Reports that the process is up. Dependencies are not checked."""
    return {"ok": True}
