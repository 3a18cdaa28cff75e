#!/usr/bin/env python
# ============================================================================
# TYPESCRIPT GENERATION SCRIPT
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# PURPOSE: Write TypeScript bindings for a database to stdout or a file
# USAGE:
#   python scripts/generate_types.py                       # Print to stdout
#   python scripts/generate_types.py --output types.ts     # Write file
#   python scripts/generate_types.py --exclude auth,storage
# ============================================================================

import sys
import os
import argparse
import asyncio

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.logging import configure_logging
from repositories.database import DatabasePool
from services import PostgresMeta, TypegenService


def _split(value):
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


async def generate(args) -> int:
    async with DatabasePool(connection_string=args.connection) as pool:
        service = TypegenService(PostgresMeta.from_pool(pool))
        result = await service.generate_typescript(
            included_schemas=_split(args.include),
            excluded_schemas=_split(args.exclude),
        )

    if not result.ok:
        print(f"Type generation failed: {result.error.message}", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(result.data)
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(result.data)
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Generate TypeScript types from a PostgreSQL catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/generate_types.py --output database.types.ts
  python scripts/generate_types.py --include public,billing

Environment Variables:
  PG_META_DB_URL        Full PostgreSQL connection string
  DATABASE_URL          Fallback connection string
  POSTGRES_HOST         Database host (default: localhost)
  POSTGRES_DB           Database name (default: postgres)
  POSTGRES_USER         Database user (default: postgres)
  POSTGRES_PASSWORD     Database password
  POSTGRES_PORT         Database port (default: 5432)
        """
    )
    parser.add_argument(
        "--connection",
        type=str,
        help="PostgreSQL connection string (overrides environment)"
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        help="File to write (defaults to stdout)"
    )
    parser.add_argument(
        "--include",
        type=str,
        help="Comma-separated schemas to include"
    )
    parser.add_argument(
        "--exclude",
        type=str,
        help="Comma-separated schemas to exclude"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    args = parser.parse_args()

    configure_logging(level="DEBUG" if args.verbose else "WARNING")

    sys.exit(asyncio.run(generate(args)))


if __name__ == "__main__":
    main()
