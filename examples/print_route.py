"""
Example: print the route from the filesystem root to the home directory.

Run with:
    python examples/print_route.py [path]
"""

import asyncio
import logging
import sys
from typing import Optional

from vpath import VirtualPath, VpathError


async def main(target: Optional[str] = None):
    """Print a path followed by every node on its route from the root."""
    node = await VirtualPath.create(target) if target else await VirtualPath.get_home()
    print(node)

    for step in await node.get_route():
        print(f"  {step}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else None))
    except VpathError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
