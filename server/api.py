"""FastAPI server exposing the recommendation endpoints."""

from typing import Any, Dict

from fastapi import FastAPI, HTTPException

from costume_app.app import CostumeConciergeApp
from costume_app.logging_config import configure_logging

configure_logging()

concierge_app = CostumeConciergeApp()
app = FastAPI(title="Costume Concierge", version="0.1.0")


@app.get("/healthz")
async def healthcheck() -> dict:
    """Lightweight readiness probe."""

    return {
        "status": "ok",
        "service": "costume-concierge",
        "environment": concierge_app.config.environment or "local",
        "dataset_version": concierge_app.catalog.version,
        "catalog_size": len(concierge_app.catalog),
        "copywriter": concierge_app.copywriter.enabled,
    }


@app.post("/recommend")
def recommend(payload: Dict[str, Any]) -> dict:
    """Return three costume recommendations for a quiz submission."""

    response = concierge_app.recommend(payload)
    if response.get("status") == "needs_review":
        raise HTTPException(status_code=400, detail=response)
    if response.get("status") == "empty":
        raise HTTPException(
            status_code=404, detail="No costumes match these boundaries. Try loosening a preference."
        )
    return response


@app.post("/more-like-this")
def more_like_this(payload: Dict[str, Any]) -> dict:
    """Return up to five costumes similar to a selected one."""

    response = concierge_app.more_like_this(payload)
    status = response.get("status")
    if status == "needs_review":
        raise HTTPException(status_code=400, detail=response)
    if status == "not_found":
        raise HTTPException(status_code=404, detail="Selected costume not found")
    if status == "empty":
        raise HTTPException(status_code=404, detail="No similar costumes found. Try different constraints.")
    return response


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=8080, reload=False)
