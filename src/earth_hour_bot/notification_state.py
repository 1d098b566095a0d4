from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

THANK_YOU_SHOWN_KEY = "notifications.thankYouShown"


@dataclass
class NotificationState:
    values: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str) -> Any:
        return self.values.get(key)

    def set(self, key: str, value: Any) -> None:
        self.values[key] = value


def load_state(path: Path) -> NotificationState:
    if not path.exists():
        return NotificationState()

    with path.open("r", encoding="utf-8") as file_obj:
        data = json.load(file_obj)

    if not isinstance(data, dict):
        return NotificationState()

    values = data.get("values", {})
    if not isinstance(values, dict):
        return NotificationState()
    return NotificationState(values={str(key): value for key, value in values.items()})


def save_state_atomic(path: Path, state: NotificationState) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"version": 1, "values": state.values}

    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        delete=False,
    ) as temp_file:
        json.dump(payload, temp_file, indent=2, sort_keys=True)
        temp_file.write("\n")
        temp_name = temp_file.name

    os.replace(temp_name, path)
