import argparse
import asyncio
import json
import logging
from datetime import date

from compensation.config import settings
from compensation.database import AsyncSessionLocal, engine
from compensation.services.workforce import (
    calculate_bonus_for_employee, calculate_workforce_bonuses, summarize_workforce,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bonus report for a year")
    parser.add_argument("--year", type=int, default=date.today().year - 1,
                        help="Bonus year (default: previous year)")
    parser.add_argument("--as-of", type=date.fromisoformat, default=None,
                        help="Reference date for year-end seniority (default: today)")
    parser.add_argument("--employee", default=None, help="Single employee id")
    return parser


async def run_report(args) -> dict:
    try:
        if args.employee:
            async with AsyncSessionLocal() as db:
                result = await calculate_bonus_for_employee(db, args.employee, args.year, as_of=args.as_of)
            return result.model_dump(mode="json")

        results = await calculate_workforce_bonuses(args.year, as_of=args.as_of)
        return {
            "summary": summarize_workforce(results, args.year).model_dump(mode="json"),
            "employees": [r.model_dump(mode="json") for r in results],
        }
    finally:
        await engine.dispose()


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL)
    report = asyncio.run(run_report(args))
    print(json.dumps(report, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
