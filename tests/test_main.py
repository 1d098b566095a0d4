from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime

from earth_hour_bot.bot_handlers import SERVICE_KEY
from earth_hour_bot.main import scheduled_tick_callback, startup_thank_you


@dataclass
class BrokenService:
    calls: list[datetime] = field(default_factory=list)

    async def tick(self, now: datetime) -> list[str]:
        self.calls.append(now)
        raise RuntimeError("config unreadable")

    async def send_thank_you(self, now: datetime) -> bool:
        self.calls.append(now)
        raise RuntimeError("telegram unavailable")


@dataclass
class FakeApplication:
    bot_data: dict


@dataclass
class FakeContext:
    application: FakeApplication


def test_failed_tick_does_not_escape_callback() -> None:
    service = BrokenService()
    context = FakeContext(application=FakeApplication(bot_data={SERVICE_KEY: service}))

    asyncio.run(scheduled_tick_callback(context))
    asyncio.run(scheduled_tick_callback(context))

    assert len(service.calls) == 2
    assert all(now.tzinfo is not None for now in service.calls)


def test_failed_thank_you_does_not_escape_startup() -> None:
    service = BrokenService()

    asyncio.run(startup_thank_you(FakeApplication(bot_data={SERVICE_KEY: service})))

    assert len(service.calls) == 1
