"""HUD configuration read from ~/.claude/hud/config.json."""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

import orjson

logger = logging.getLogger(__name__)

HUD_CONFIG_PATH = Path.home() / ".claude" / "hud" / "config.json"

# Seconds between re-reads of the config file
REFRESH_INTERVAL = 30.0

PANEL_IDS = ("status", "context", "cost", "contextInfo", "tools", "agents", "todos")

# Default values
DEFAULTS = {
    "panelOrder": list(PANEL_IDS),
    "hiddenPanels": [],
    "width": 0,
    "animate": False,
    "color": True,
    "showCost": True,
}


@dataclass
class ConfigReadResult:
    data: Optional[dict]
    error: Optional[str] = None


def normalize_pricing(value: Any) -> Optional[dict]:
    """Keep only well-formed pricing overrides.

    A family survives only when both input and output are numbers; lastUpdated
    only when it is a string. Returns None if nothing survives.
    """
    if not isinstance(value, dict):
        return None
    result: dict[str, Any] = {}
    for family in ("sonnet", "opus", "haiku"):
        rates = value.get(family)
        if not isinstance(rates, dict):
            continue
        price_in, price_out = rates.get("input"), rates.get("output")
        if _is_number(price_in) and _is_number(price_out):
            result[family] = {"input": price_in, "output": price_out}
    if isinstance(value.get("lastUpdated"), str):
        result["lastUpdated"] = value["lastUpdated"]
    return result or None


def normalize_panel_list(value: Any) -> Optional[list[str]]:
    """Filter to known panel ids, dropping duplicates but keeping order."""
    if not isinstance(value, list):
        return None
    return list(dict.fromkeys(v for v in value if v in PANEL_IDS))


def build_config(raw: dict) -> dict:
    config: dict[str, Any] = {}
    for key in ("panelOrder", "hiddenPanels"):
        panels = normalize_panel_list(raw.get(key))
        if panels is not None:
            config[key] = panels
    width = raw.get("width")
    if _is_number(width) and width > 0:
        config["width"] = int(width)
    for key in ("animate", "color", "showCost"):
        if isinstance(raw.get(key), bool):
            config[key] = raw[key]
    pricing = normalize_pricing(raw.get("pricing"))
    if pricing is not None:
        config["pricing"] = pricing
    return config


def read_config(config_path: str | Path = HUD_CONFIG_PATH) -> ConfigReadResult:
    """Read and normalize the config file. Never raises."""
    path = Path(config_path)
    if not path.exists():
        return ConfigReadResult(data=None)
    try:
        raw = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as e:
        logger.debug("Failed to read config %s: %s", path, e)
        return ConfigReadResult(data=None, error="Failed to read hud config")
    if not isinstance(raw, dict):
        logger.debug("Config %s is not a JSON object", path)
        return ConfigReadResult(data=None, error="Failed to read hud config")
    return ConfigReadResult(data=build_config(raw))


class ConfigManager:
    """Cached view of the config file with typed getters."""

    def __init__(
        self,
        config_path: str | Path = HUD_CONFIG_PATH,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._path = Path(config_path)
        self._clock = clock
        self._data: Optional[dict] = None
        self._error: Optional[str] = None
        self._last_read: Optional[float] = None

    @property
    def error(self) -> Optional[str]:
        """Error from the last read; does not touch the file."""
        return self._error

    def force_refresh(self) -> Optional[dict]:
        result = read_config(self._path)
        self._data = result.data
        self._error = result.error
        self._last_read = self._clock()
        return self._data

    def refresh(self) -> None:
        """Re-read the file if the refresh interval has passed."""
        now = self._clock()
        if self._last_read is None or now - self._last_read > REFRESH_INTERVAL:
            self.force_refresh()

    def _value(self, key: str) -> Any:
        self.refresh()
        if self._data and key in self._data:
            return self._data[key]
        return DEFAULTS.get(key)

    def get_string(self, key: str) -> str:
        val = self._value(key)
        return "" if val is None else str(val)

    def get_int(self, key: str) -> int:
        val = self._value(key)
        try:
            return int(val)
        except (ValueError, TypeError):
            return DEFAULTS.get(key, 0)

    def get_bool(self, key: str) -> bool:
        val = self._value(key)
        if isinstance(val, bool):
            return val
        if isinstance(val, str):
            return val.lower() in ("true", "1", "yes")
        return bool(val)

    @property
    def panel_order(self) -> list[str]:
        return list(self._value("panelOrder"))

    @property
    def hidden_panels(self) -> list[str]:
        return list(self._value("hiddenPanels"))

    @property
    def width(self) -> Optional[int]:
        return self.get_int("width") or None

    @property
    def pricing(self) -> Optional[dict]:
        return self._value("pricing")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
