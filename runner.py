import argparse
import asyncio
import json
import sys
import time
from pathlib import Path

from shots_scraper.config import load_settings, parse_limit
from shots_scraper.dispatcher import crawl_shots
from shots_scraper.formatter import apply_limit, format_records, records_to_json
from shots_scraper.logging_utils import configure_logging, null_logger


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="60fps.design shot scraper")
    p.add_argument("--url", default=None, help="Gallery URL (defaults to SCRAPER_TARGET_URL)")
    p.add_argument("--limit", default=None, help="Max records to return (falls back to $LIMIT)")
    p.add_argument("--pipeline", action="store_true",
                   help="Silence all logging; stdout carries only the JSON payload")
    p.add_argument("--serverless", action="store_true",
                   help="Use the reduced timeout/attempt budget")
    p.add_argument("--headful", action="store_true", help="Show the browser window")
    p.add_argument("--no-fallback", action="store_true",
                   help="Fail instead of returning example data when scraping fails")
    p.add_argument("--out-json", type=str, default=None, help="Write JSON here instead of stdout")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING...")
    return p.parse_args(argv)


PREVIEW_ROWS = 5


def log_summary(log, payload, elapsed):
    log.info("Scraping completed in %.2f seconds", elapsed)
    for i, row in enumerate(payload[:PREVIEW_ROWS], 1):
        log.info("%d. %s", i, row["title"])
        log.info("   URL: %s", row["url"])
        log.info("   Preview: %s", row["preview_url"])
    if len(payload) > PREVIEW_ROWS:
        log.info("... and %d more", len(payload) - PREVIEW_ROWS)


def resolve_limit(arg_value, settings_limit=None):
    """--limit wins when it is a positive number, otherwise $LIMIT (via settings)."""
    return parse_limit(arg_value) or settings_limit


async def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        settings = load_settings(
            headless=False if args.headful else None,
            use_fallback=False if args.no_fallback else None,
            log_level=args.log_level,
        )
        if args.serverless:
            settings = settings.serverless()

        if args.pipeline:
            configure_logging(pipeline=True)
            log = null_logger()
        else:
            log = configure_logging(settings.log_level)

        limit = resolve_limit(args.limit, settings.limit)
        started = time.monotonic()
        result = await crawl_shots(url=args.url, settings=settings, log=log)
        elapsed = time.monotonic() - started

        rows = apply_limit(format_records(result.shots), limit)
        payload = records_to_json(rows)

        if args.out_json:
            Path(args.out_json).parent.mkdir(parents=True, exist_ok=True)
            with open(args.out_json, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            log.info("[OK] Wrote %d records -> %s", len(payload), args.out_json)
        else:
            sys.stdout.write(json.dumps(payload, ensure_ascii=False))
            sys.stdout.flush()

        log_summary(log, payload, elapsed)
        if result.used_fallback:
            log.warning("[FALLBACK] Output is example data, not a live scrape (%s)", result.error)
        else:
            log.info("[OK] Ready to process %d shots", len(payload))
        return 0

    except Exception as e:
        sys.stderr.write(json.dumps({"success": False, "error": str(e) or e.__class__.__name__}) + "\n")
        return 1


def run():
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
