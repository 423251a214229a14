#!/usr/bin/env python3
"""
Seed the Glasify catalog database from a named preset.

Usage:
    # Minimal preset (default)
    glasify-seed

    # Demo data, per-item progress
    glasify-seed --preset=demo-client --verbose

    # Keep going past bad records, report them at the end
    glasify-seed --preset=full-catalog --continue-on-error

    # Check a preset without touching the database
    glasify-seed --preset=full-catalog --validate-only --strict

Environment:
    DATABASE_URL            required unless --validate-only
    TENANT_BUSINESS_NAME    required unless --validate-only
    TENANT_*                optional tenant settings, see glasify.config

Exit codes: 0 on full success, 1 on any failure (including runs that
completed with failed records).
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from glasify import __version__
from glasify.config import get_batch_size, get_database_url, load_tenant_settings
from glasify.db import build_engine, build_session_factory, init_db
from glasify.presets import DEFAULT_PRESET, get_preset, list_presets
from glasify.services.exceptions import ConfigError, SeedAborted, UnknownPresetError
from glasify.services.logging_config import setup_logging
from glasify.services.preset_validator import validate_preset
from glasify.services.seed_orchestrator import SeedOptions, SeedOrchestrator
from glasify.services.seed_stats import SeedStats

logger = logging.getLogger("glasify-cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glasify-seed",
        description="Idempotent, dependency-ordered seeding of the Glasify catalog",
    )
    parser.add_argument("--preset", default=DEFAULT_PRESET,
                        help=f"Preset to seed (default: {DEFAULT_PRESET}). One of: {', '.join(list_presets())}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every record")
    parser.add_argument("--skip-validation", action="store_true",
                        help="Trust the preset data and bypass the validation factories")
    parser.add_argument("--continue-on-error", action="store_true",
                        help="Record failing records and keep going instead of aborting")
    parser.add_argument("--batch-size", type=int, default=None,
                        help="Upsert batch size (default: SEED_BATCH_SIZE or 100)")
    parser.add_argument("--no-clean", action="store_true",
                        help="Skip deleting previously seeded rows before seeding")
    parser.add_argument("--validate-only", action="store_true",
                        help="Validate the preset and exit without touching the database")
    parser.add_argument("--strict", action="store_true",
                        help="With --validate-only, treat warnings as failures")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def run_seed(database_url: str, preset, tenant, options: SeedOptions) -> SeedStats:
    engine = build_engine(database_url)
    try:
        await init_db(engine)
        session_factory = build_session_factory(engine)
        async with session_factory() as session:
            orchestrator = SeedOrchestrator(session, tenant=tenant, options=options)
            return await orchestrator.seed(preset)
    finally:
        await engine.dispose()


def _validate_only(preset, strict: bool) -> int:
    report = validate_preset(preset, strict=strict)
    for entry in report.errors:
        print(f"ERROR   {entry.section}[{entry.index}] {entry.path} {entry.code}: {entry.message}")
    for entry in report.warnings:
        print(f"WARNING {entry.section}[{entry.index}] {entry.path} {entry.code}: {entry.message}")
    print(f"Preset '{preset.name}': {report.status} "
          f"({len(report.errors)} errors, {len(report.warnings)} warnings, {report.execution_time_ms} ms)")
    return 1 if report.status == "failed" else 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO", json_output=args.json_logs)

    try:
        preset = get_preset(args.preset)
    except UnknownPresetError as exc:
        print(f"Unknown preset: {exc.name}", file=sys.stderr)
        print(f"Available presets: {', '.join(exc.available)}", file=sys.stderr)
        return 1

    if args.validate_only:
        return _validate_only(preset, args.strict)

    try:
        database_url = get_database_url()
        tenant = load_tenant_settings()
        batch_size = args.batch_size if args.batch_size is not None else get_batch_size()
    except ConfigError as exc:
        logger.error("%s", exc.message)
        return 1
    if batch_size <= 0:
        logger.error("--batch-size must be positive")
        return 1

    options = SeedOptions(
        skip_validation=args.skip_validation,
        continue_on_error=args.continue_on_error,
        batch_size=batch_size,
        clean=not args.no_clean,
        verbose=args.verbose,
    )

    try:
        stats = asyncio.run(run_seed(database_url, preset, tenant, options))
    except SeedAborted as exc:
        logger.error("Seeding aborted at %s: %s", exc.stage, exc.cause.message)
        return 1

    if stats.total_failed > 0:
        logger.error("Seeding completed with %d failed records", stats.total_failed)
        return 1
    logger.info("Seeding completed: %d created, %d updated in %d ms",
                stats.total_created, stats.total_updated, stats.duration_ms)
    return 0


if __name__ == "__main__":
    sys.exit(main())
