"""
Unit tests for the exact-alarm bridge.

- below API level 31 exact alarms are always allowed and nothing is opened
- from API level 31 on the platform answers and the settings page is launched
- unknown method names get an explicit "not implemented" response
"""

import unittest

from todayschedule.alarm_bridge import (
    ACTION_REQUEST_SCHEDULE_EXACT_ALARM,
    FLAG_ACTIVITY_NEW_TASK,
    NOT_IMPLEMENTED,
    BridgeResponse,
    CapabilityBridge,
    Platform,
    SimulatedPlatform,
)


class ExplodingPlatform(SimulatedPlatform):
    """Fails the test if the bridge asks for the permission state."""

    def can_schedule_exact_alarms(self) -> bool:
        raise AssertionError("permission state must not be queried below the gating level")


class TestCapabilityBridge(unittest.TestCase):
    def test_platform_must_implement_both_methods(self) -> None:
        with self.assertRaises(TypeError):
            Platform()

        class HalfPlatform(Platform):
            def can_schedule_exact_alarms(self) -> bool:
                return True

        with self.assertRaises(TypeError):
            HalfPlatform()

    def test_pre_gating_always_allowed(self) -> None:
        for permitted in (True, False):
            platform = ExplodingPlatform(30, "com.example.tkt", exact_alarms_permitted=permitted)
            self.assertTrue(CapabilityBridge(platform).is_exact_alarm_allowed())

    def test_gated_reports_platform_state(self) -> None:
        self.assertTrue(CapabilityBridge(SimulatedPlatform(31, "com.example.tkt", True)).is_exact_alarm_allowed())
        self.assertFalse(CapabilityBridge(SimulatedPlatform(34, "com.example.tkt", False)).is_exact_alarm_allowed())

    def test_pre_gating_settings_is_noop(self) -> None:
        platform = SimulatedPlatform(29, "com.example.tkt")
        self.assertTrue(CapabilityBridge(platform).open_exact_alarm_settings())
        self.assertEqual(platform.launched, [])

    def test_gated_settings_launches_intent_for_app(self) -> None:
        platform = SimulatedPlatform(33, "com.example.tkt", exact_alarms_permitted=False)
        bridge = CapabilityBridge(platform)

        self.assertTrue(bridge.open_exact_alarm_settings())
        self.assertEqual(len(platform.launched), 1)
        intent = platform.launched[0]
        self.assertEqual(intent.action, ACTION_REQUEST_SCHEDULE_EXACT_ALARM)
        self.assertEqual(intent.data, "package:com.example.tkt")
        self.assertTrue(intent.flags & FLAG_ACTIVITY_NEW_TASK)

        # navigation does not change the answer by itself; the caller re-checks
        self.assertFalse(bridge.is_exact_alarm_allowed())
        platform.exact_alarms_permitted = True
        self.assertTrue(bridge.is_exact_alarm_allowed())

    def test_handle_known_methods(self) -> None:
        bridge = CapabilityBridge(SimulatedPlatform(33, "com.example.tkt", exact_alarms_permitted=False))
        self.assertEqual(bridge.handle("isExactAlarmAllowed"), BridgeResponse(True, False))
        self.assertEqual(bridge.handle("openExactAlarmSettings"), BridgeResponse(True, True))

    def test_handle_unknown_method(self) -> None:
        bridge = CapabilityBridge(SimulatedPlatform(33, "com.example.tkt"))
        with self.assertLogs("todayschedule.alarm_bridge", level="WARNING"):
            response = bridge.handle("scheduleAlarm")
        self.assertIs(response, NOT_IMPLEMENTED)
        self.assertFalse(response.implemented)


if __name__ == "__main__":
    unittest.main()
