#!/usr/bin/env python3
"""
Give an existing account the admin role.
Run: python scripts/promote_admin.py <user_id>
"""

import argparse
import asyncio
import sys
import os

# Add parent dir to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Load env
from dotenv import load_dotenv
load_dotenv()

from adapters.web.loader import site


async def promote(user_id: str) -> int:
    if await site.auth.promote(user_id):
        print(f"✅ {user_id} is now an admin")
        return 0
    print(f"❌ No profile found for {user_id}")
    return 1


def main():
    parser = argparse.ArgumentParser(description="Promote a user to admin")
    parser.add_argument("user_id")
    args = parser.parse_args()
    sys.exit(asyncio.run(promote(args.user_id)))


if __name__ == "__main__":
    main()
