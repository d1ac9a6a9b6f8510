import json
import sys
from datetime import datetime, timezone


LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40, "critical": 50}

_threshold = LEVELS["info"]


def set_log_level(level: str) -> None:
    global _threshold
    _threshold = LEVELS.get((level or "info").lower(), LEVELS["info"])


def log_event(level: str, event: str, **fields) -> None:
    if LEVELS.get(level.lower(), LEVELS["info"]) < _threshold:
        return
    payload = {
        "ts": datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z",
        "level": level.lower(),
        "event": event,
    }
    payload.update(fields or {})
    try:
        sys.stdout.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")
    except OSError:
        # best-effort logging
        pass
