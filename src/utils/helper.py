import datetime as _dt

from pathlib import Path


def ensure_store_root(root: Path) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    return root


def rel_time_iso(ts: float | None) -> str:
    if ts is None:
        moment = _dt.datetime.now(_dt.timezone.utc)
    else:
        moment = _dt.datetime.fromtimestamp(ts, _dt.timezone.utc)
    return moment.replace(microsecond=0, tzinfo=None).isoformat() + "Z"
