#!/usr/bin/env python3
"""
Script to (re)send a fixture email to every active player.
Run: python scripts/send_fixture_notification.py <fixture_id> [--kind new|update|completed|cancel]
"""

import argparse
import asyncio
import sys
import os
from uuid import UUID

# Add parent dir to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Load env
from dotenv import load_dotenv
load_dotenv()

from core.domain.models import NotificationKind
from core.services import NotificationError
from adapters.web.loader import site, notification_service


async def send(fixture_id: UUID, kind: NotificationKind):
    print(f"🔍 Looking up fixture {fixture_id}...")
    fixture = await site.fixtures.get_fixture(fixture_id)
    if not fixture:
        print("❌ Fixture not found")
        return 1

    print(f"✅ {fixture.opponent} on {fixture.match_date:%Y-%m-%d %H:%M} ({fixture.status})")
    print(f"📧 Sending '{kind.value}' notification...")
    try:
        result = await notification_service.notify(fixture, kind)
    except NotificationError as e:
        print(f"❌ {e}")
        return 1

    print(f"✅ {result.message} ({result.failed} failed)")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Email players about a fixture")
    parser.add_argument("fixture_id", type=UUID)
    parser.add_argument(
        "--kind",
        choices=[k.value for k in NotificationKind],
        default=NotificationKind.UPDATE.value,
    )
    args = parser.parse_args()
    sys.exit(asyncio.run(send(args.fixture_id, NotificationKind(args.kind))))


if __name__ == "__main__":
    main()
