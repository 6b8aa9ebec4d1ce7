from __future__ import annotations

LEVEL_DEFAULT = "info"
# Lower rank is chattier; "ok" and "notice" sit with "info".
LEVEL_RANKS = {"info": 0, "ok": 0, "notice": 0, "warn": 1, "error": 2}

_threshold = LEVEL_RANKS[LEVEL_DEFAULT]


def _normalize_level(level: str | None) -> str:
    if not level:
        return LEVEL_DEFAULT
    return level.strip().lower() or LEVEL_DEFAULT


def set_threshold(level: str) -> None:
    """Hide messages below ``level``; unknown levels are rejected."""

    global _threshold
    normalized = _normalize_level(level)
    if normalized not in LEVEL_RANKS:
        raise ValueError(f"Unknown log level: {level}")
    _threshold = LEVEL_RANKS[normalized]


def log(message: str, level: str = LEVEL_DEFAULT, indent: int = 0) -> None:
    normalized = _normalize_level(level)
    if LEVEL_RANKS.get(normalized, 0) < _threshold:
        return
    prefix = " " * max(indent, 0)
    print(f"{prefix}[{normalized}] {message}")


def log_info(message: str, indent: int = 0) -> None:
    log(message, "info", indent)


def log_ok(message: str, indent: int = 0) -> None:
    log(message, "ok", indent)


def log_notice(message: str, indent: int = 0) -> None:
    log(message, "notice", indent)


def log_warn(message: str, indent: int = 0) -> None:
    log(message, "warn", indent)


def log_error(message: str, indent: int = 0) -> None:
    log(message, "error", indent)
