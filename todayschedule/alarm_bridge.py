"""
Exact-alarm capability bridge.

Answers two requests coming from the app shell over the
"com.example.tkt/exact_alarm" channel:

    isExactAlarmAllowed     -> bool
    openExactAlarmSettings  -> True (navigation is fire-and-forget)

Exact alarms are only permission-gated from API level 31 on.
Below that the answer is always True and there is no settings page to open.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

CHANNEL_NAME = "com.example.tkt/exact_alarm"
EXACT_ALARM_GATING_API_LEVEL = 31
ACTION_REQUEST_SCHEDULE_EXACT_ALARM = "android.settings.REQUEST_SCHEDULE_EXACT_ALARM"
FLAG_ACTIVITY_NEW_TASK = 0x10000000


@dataclass(frozen=True)
class SettingsIntent:
    action: str
    data: str
    flags: int = 0


@dataclass(frozen=True)
class BridgeResponse:
    implemented: bool
    value: Any = None


NOT_IMPLEMENTED = BridgeResponse(implemented=False)


class Platform(ABC):
    """The host operating system as seen by the bridge."""

    api_level: int
    package_name: str

    @abstractmethod
    def can_schedule_exact_alarms(self) -> bool:
        ...

    @abstractmethod
    def start_activity(self, intent: SettingsIntent) -> None:
        ...


class SimulatedPlatform(Platform):
    """
    Stand-in platform for the CLI and tests.

    Launched intents are only recorded and logged; nothing is shown.
    """

    def __init__(self, api_level: int, package_name: str, exact_alarms_permitted: bool = True) -> None:
        self.api_level = api_level
        self.package_name = package_name
        self.exact_alarms_permitted = exact_alarms_permitted
        self.launched: List[SettingsIntent] = []

    def can_schedule_exact_alarms(self) -> bool:
        return self.exact_alarms_permitted

    def start_activity(self, intent: SettingsIntent) -> None:
        logger.info("Launching %s for %s", intent.action, intent.data)
        self.launched.append(intent)


class CapabilityBridge:
    def __init__(self, platform: Platform) -> None:
        self.platform = platform
        self._handlers: Dict[str, Callable[[], Any]] = {
            "isExactAlarmAllowed": self.is_exact_alarm_allowed,
            "openExactAlarmSettings": self.open_exact_alarm_settings,
        }

    @property
    def gated(self) -> bool:
        return self.platform.api_level >= EXACT_ALARM_GATING_API_LEVEL

    def is_exact_alarm_allowed(self) -> bool:
        if not self.gated:
            return True
        return bool(self.platform.can_schedule_exact_alarms())

    def open_exact_alarm_settings(self) -> bool:
        """
        Ask the platform to show the exact-alarm settings page for this app.

        Returns immediately; the caller re-checks is_exact_alarm_allowed()
        later to see what the user decided.
        """
        if self.gated:
            intent = SettingsIntent(
                action=ACTION_REQUEST_SCHEDULE_EXACT_ALARM,
                data=f"package:{self.platform.package_name}",
                flags=FLAG_ACTIVITY_NEW_TASK,
            )
            self.platform.start_activity(intent)
        return True

    def handle(self, method: str) -> BridgeResponse:
        handler: Optional[Callable[[], Any]] = self._handlers.get(method)
        if handler is None:
            logger.warning("Unknown method %r on %s", method, CHANNEL_NAME)
            return NOT_IMPLEMENTED
        return BridgeResponse(implemented=True, value=handler())
