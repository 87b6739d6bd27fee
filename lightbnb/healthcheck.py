"""
Database health check.
Verifies connectivity and that the LightBnB tables exist.

Run with:
    python -m lightbnb.healthcheck
"""

import asyncio
import logging
import sys
from typing import Any, Dict

from lightbnb.config import settings
from lightbnb.database import QueryGateway
from lightbnb.utils.exceptions import DatabaseError

logger = logging.getLogger(__name__)

EXPECTED_TABLES = ("users", "properties", "reservations", "property_reviews")

TABLES_QUERY = """
    SELECT table_name
    FROM information_schema.tables
    WHERE table_schema = 'public'
    ORDER BY table_name;
    """


async def check_database(gateway: QueryGateway) -> Dict[str, Any]:
    """
    Check connectivity and schema presence.

    Args:
        gateway: Gateway to check

    Returns:
        Dictionary with connectivity, missing tables, pool status and an overall flag
    """
    results: Dict[str, Any] = {
        "connected": False,
        "missing_tables": list(EXPECTED_TABLES),
        "pool": {},
        "healthy": False,
    }

    if not await gateway.ping():
        return results
    results["connected"] = True

    try:
        rows = await gateway.execute(TABLES_QUERY)
    except DatabaseError as e:
        logger.error(f"Failed to list tables: {e}")
        return results

    existing = {row["table_name"] for row in rows}
    results["missing_tables"] = [table for table in EXPECTED_TABLES if table not in existing]
    results["pool"] = gateway.pool_status()
    results["healthy"] = not results["missing_tables"]
    return results


async def main() -> int:
    """Run the health check and print a report. Returns the process exit code."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    async with QueryGateway.from_settings(settings) as gateway:
        results = await check_database(gateway)

    print(f"Database connected: {results['connected']}")
    if results["missing_tables"]:
        print(f"Missing tables: {', '.join(results['missing_tables'])}")
    for key, value in results["pool"].items():
        print(f"  {key}: {value}")

    if not results["healthy"]:
        print("Health check failed")
        return 1
    print("Health check passed")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
