from __future__ import annotations

from earth_hour_bot.formatting import normalize_language

FALLBACK_LANGUAGE = "en"

CATALOG: dict[str, dict[str, str]] = {
    "en": {
        "thank_you": (
            "🌍 Thanks for joining Earth Hour!\n"
            "The next Earth Hour is on {date} at {time}. We'll remind you before it starts."
        ),
        "one_month_before": "🗓️ One month to go: Earth Hour is on {date} at {time}.",
        "one_week_before": "⏳ Earth Hour is one week from today, at {time}.",
        "one_day_before": "🌙 Earth Hour is tomorrow at {time}. Time to plan your hour in the dark.",
        "thirty_min_before": "🕯️ Earth Hour starts in 30 minutes. Get ready to switch off!",
        "started": "🌑 Earth Hour has started. Lights out until {time}.",
        "ended": "💡 Earth Hour has ended. Thanks for taking part!",
    },
    "nl": {
        "thank_you": (
            "🌍 Bedankt voor het meedoen aan Earth Hour!\n"
            "De volgende Earth Hour is op {date} om {time}. We herinneren je eraan voordat het begint."
        ),
        "one_month_before": "🗓️ Nog één maand: Earth Hour is op {date} om {time}.",
        "one_week_before": "⏳ Over een week is het Earth Hour, om {time}.",
        "one_day_before": "🌙 Morgen om {time} is het Earth Hour. Plan je uur in het donker.",
        "thirty_min_before": "🕯️ Earth Hour begint over 30 minuten. Klaar om het licht uit te doen?",
        "started": "🌑 Earth Hour is begonnen. Lichten uit tot {time}.",
        "ended": "💡 Earth Hour is voorbij. Bedankt voor het meedoen!",
    },
}


def render_message(name: str, locale: str | None, **values: str) -> str:
    templates = CATALOG.get(normalize_language(locale), CATALOG[FALLBACK_LANGUAGE])
    return templates[name].format(**values)
