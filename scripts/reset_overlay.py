import argparse
import asyncio

from hospital_admin.core.config import settings
from hospital_admin.platform.provider_registry import ProviderRegistry

async def main(prefix: str, clear: bool):
    """
    Lists the durable overlay keys under a prefix, and deletes them with --clear.
    """
    port = ProviderRegistry(settings).durable_overlay()
    await port.open()
    try:
        keys = await port.keys(prefix)
        print(f"{len(keys)} overlay key(s) under '{prefix or '*'}' ({settings.OVERLAY_PROVIDER})")
        for key in keys:
            print(f"  - {key}")
            if clear:
                await port.delete(key)
        if clear and keys:
            print("...cleared.")
    finally:
        await port.close()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Inspect or reset the durable overlay")
    parser.add_argument("prefix", nargs="?", default="", help="e.g. staff:3: or billing:1:")
    parser.add_argument("--clear", action="store_true")
    args = parser.parse_args()
    asyncio.run(main(args.prefix, args.clear))
