"""Startup configuration checks and logging."""

import sys

import asyncpg
import structlog

logger = structlog.get_logger()

REQUIRED_TABLES = ("collections", "gallery_items")


async def check_database() -> bool:
    """Check PostgreSQL connectivity and that the gallery tables exist."""
    from vitrine.config import settings

    print("  Checking PostgreSQL...", flush=True)

    try:
        conn = await asyncpg.connect(settings.database_url)
    except asyncpg.InvalidCatalogNameError:
        print("    ✗ Database does not exist", flush=True)
        print(f"      Create it with: createdb {settings.db_name}", flush=True)
        return False
    except Exception as e:
        print(f"    ✗ Cannot connect to PostgreSQL: {e}", flush=True)
        print("      Check DATABASE_URL environment variable", flush=True)
        return False

    try:
        print("    ✓ Database connection established", flush=True)
        rows = await conn.fetch(
            """
            SELECT table_name
            FROM information_schema.tables
            WHERE table_schema = current_schema()
            AND table_name = ANY($1::text[])
            """,
            list(REQUIRED_TABLES),
        )
        missing = set(REQUIRED_TABLES) - {row["table_name"] for row in rows}
        if missing:
            print(f"    ✗ Missing tables: {', '.join(sorted(missing))}", flush=True)
            print("      Create them with: vitrine db init", flush=True)
            return False
        print("    ✓ Gallery tables present", flush=True)
        return True
    except Exception as e:
        print(f"    ✗ Error inspecting schema: {e}", flush=True)
        return False
    finally:
        await conn.close()


async def run_startup_checks() -> bool:
    """Run all vital sign checks and return success status."""
    print("\nStarting Vitrine - Checking vital signs...\n", flush=True)
    sys.stdout.flush()

    if not await check_database():
        return False

    print("\n✓ All vital signs normal - Vitrine is ready!\n", flush=True)
    sys.stdout.flush()
    return True


def check_configuration() -> bool:
    """Warn about configuration that leaves the gate closed to everyone."""
    from vitrine.config import settings

    if not settings.site_password:
        logger.critical(
            "SITE_PASSWORD not configured",
            help="Set SITE_PASSWORD; every login will fail until it is set",
        )
        return False

    if not settings.session_secret:
        logger.warning(
            "SESSION_SECRET not configured",
            help="Session cookies are signed with SITE_PASSWORD instead",
        )

    return True
