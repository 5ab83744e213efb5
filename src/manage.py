"""Back-office command-line tools.

Signs in with BACKOFFICE_EMAIL / BACKOFFICE_PASSWORD against the backend
named by BACKOFFICE_API_URL and runs one engine operation.

Usage:
    python src/manage.py backup             # Create a server-side backup
    python src/manage.py restore FILE       # Restore all data from a backup file
    python src/manage.py inventory          # List stock, flagging low items
"""

import argparse
import asyncio
import os
import sys


async def _with_session(operation):
    from backoffice.domain import backoffice
    from backoffice.engine import Backoffice

    with backoffice.domain_context():
        engine = Backoffice.from_settings()
        email = os.getenv("BACKOFFICE_EMAIL", "")
        password = os.getenv("BACKOFFICE_PASSWORD", "")
        try:
            if not await engine.login(email, password):
                print(f"Could not sign in as {email or '<unset>'}.")
                return 1
            return await operation(engine)
        finally:
            await engine.close()


async def create_backup(engine) -> int:
    result = await engine.create_backup()
    if result is None:
        print("Backup failed.")
        return 1
    print(result.message)
    return 0


async def restore_backup(engine, file) -> int:
    if await engine.restore_backup(file):
        print("Data restored.")
        return 0
    print(engine.notifications[0].message)
    return 1


async def list_inventory(engine) -> int:
    snapshot = engine.snapshot()
    for item in sorted(snapshot.inventory, key=lambda item: item.sku):
        flag = "  LOW" if item.is_low_stock else ""
        print(f"{item.sku:<14} {item.name:<40} {item.quantity:>6} / {item.threshold:<6}{flag}")
    print(f"{len(snapshot.inventory)} items, {len(snapshot.low_stock_items)} low on stock.")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Back-office management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("backup", help="Create a server-side backup")

    restore_parser = subparsers.add_parser("restore", help="Restore all data from a backup file")
    restore_parser.add_argument("file", help="Path to the backup file")

    subparsers.add_parser("inventory", help="List inventory with low-stock flags")

    args = parser.parse_args()

    from backoffice.domain import backoffice

    backoffice.init()

    if args.command == "backup":
        code = asyncio.run(_with_session(create_backup))
    elif args.command == "restore":
        code = asyncio.run(_with_session(lambda engine: restore_backup(engine, args.file)))
    else:
        code = asyncio.run(_with_session(list_inventory))

    sys.exit(code)


if __name__ == "__main__":
    main()
