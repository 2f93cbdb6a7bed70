"""
HTTP endpoint for the shot scraper.

Run with: uvicorn shots_scraper.api:app --port 8000
Call with: GET/POST /api/scrape?limit=10
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from shots_scraper.config import ScraperSettings, load_settings, parse_limit
from shots_scraper.dispatcher import crawl_shots
from shots_scraper.formatter import apply_limit, format_records, now_iso, records_to_json

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

app = FastAPI(
    title="60fps Shot Scraper",
    description="Scrapes 60fps.design shots into datastore-ready rows",
    version="1.0.0",
)


@app.middleware("http")
async def cors(request: Request, call_next):
    # Preflight never reaches the routes.
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


def get_settings() -> ScraperSettings:
    """Serverless budget: the platform kills long requests."""
    return load_settings().serverless()


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "60fps Shot Scraper"}


@app.api_route("/api/scrape", methods=["GET", "POST"])
@app.api_route("/", methods=["GET", "POST"], include_in_schema=False)
async def scrape(limit: Optional[str] = None):
    try:
        settings = get_settings()
        result = await crawl_shots(settings=settings, log=logger)
        rows = apply_limit(format_records(result.shots), parse_limit(limit) or settings.limit)
        return JSONResponse(status_code=200, content=records_to_json(rows))
    except Exception as e:
        logger.exception("Scrape request failed")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": str(e) or "Unknown error occurred",
                "timestamp": now_iso(),
            },
        )
