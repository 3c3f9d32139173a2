import unittest

from camselect.constraints.parsing import NakedValue, parse_constraint_set
from camselect.devices.catalog import CameraDevice, FacingMode, PixelFormat, VideoProfile
from camselect.selection.candidate import (
    CandidateSettings,
    CaptureSettings,
    device_satisfies_constraint_set,
)


def _device(facing_mode: FacingMode = FacingMode.USER) -> CameraDevice:
    profile = VideoProfile(640, 480, 5.0, 30.0, PixelFormat.YUYV)
    return CameraDevice(device_id="cam0", group_id="g0", facing_mode=facing_mode, profiles=(profile,))


def _candidate() -> CandidateSettings:
    device = _device()
    return CandidateSettings.from_device(device, device.profiles[0])


class ApplyConstraintSetTests(unittest.TestCase):
    def test_resolution_is_a_filter(self) -> None:
        candidate = _candidate()
        outcome = candidate.apply_constraint_set(parse_constraint_set({"width": {"min": 1000}}))
        self.assertFalse(outcome.satisfied)
        self.assertEqual(outcome.failed_constraint_name, "width")
        self.assertIs(outcome.candidate, candidate)

        outcome = candidate.apply_constraint_set(parse_constraint_set({"height": {"max": 240}}))
        self.assertEqual(outcome.failed_constraint_name, "height")

        outcome = candidate.apply_constraint_set(parse_constraint_set({"aspectRatio": {"min": 1.5}}))
        self.assertEqual(outcome.failed_constraint_name, "aspectRatio")

    def test_ideal_resolution_never_rejects(self) -> None:
        outcome = _candidate().apply_constraint_set(parse_constraint_set({"width": 1920, "height": 1080}))
        self.assertTrue(outcome.satisfied)
        self.assertEqual(outcome.candidate.target_width, 640)
        self.assertEqual(outcome.candidate.target_height, 480)

    def test_frame_rate_narrows_across_sets(self) -> None:
        start = _candidate()
        first = start.apply_constraint_set(parse_constraint_set({"frameRate": {"min": 10, "max": 20}}))
        self.assertTrue(first.satisfied)
        self.assertEqual(first.candidate.frame_rate_range, (10.0, 20.0))
        self.assertEqual(start.frame_rate_range, (5.0, 30.0))

        second = first.candidate.apply_constraint_set(
            parse_constraint_set({"frameRate": 15}, NakedValue.EXACT)
        )
        self.assertTrue(second.satisfied)
        self.assertEqual(second.candidate.frame_rate_range, (15.0, 15.0))

        third = first.candidate.apply_constraint_set(parse_constraint_set({"frameRate": {"min": 25}}))
        self.assertFalse(third.satisfied)
        self.assertEqual(third.failed_constraint_name, "frameRate")
        self.assertIs(third.candidate, first.candidate)
        self.assertEqual(third.candidate.frame_rate_range, (10.0, 20.0))

    def test_frame_rate_request_above_limit_keeps_native_bound(self) -> None:
        outcome = _candidate().apply_constraint_set(parse_constraint_set({"frameRate": {"max": 2000}}))
        self.assertTrue(outcome.satisfied)
        self.assertEqual(outcome.candidate.frame_rate_range, (5.0, 30.0))

    def test_one_sided_frame_rate_request(self) -> None:
        outcome = _candidate().apply_constraint_set(parse_constraint_set({"frameRate": {"max": 24}}))
        self.assertEqual(outcome.candidate.frame_rate_range, (5.0, 24.0))
        self.assertEqual(outcome.candidate.current_min_frame_rate(), 5.0)
        self.assertEqual(outcome.candidate.current_max_frame_rate(), 24.0)

    def test_accumulated_ranges_update_only_on_success(self) -> None:
        candidate = _candidate()
        accepted = candidate.apply_constraint_set(parse_constraint_set({"width": {"min": 320}})).candidate
        self.assertEqual(accepted.constrained_width.min, 320)
        self.assertIsNone(accepted.constrained_width.max)
        rejected = accepted.apply_constraint_set(parse_constraint_set({"width": {"max": 100}}))
        self.assertEqual(rejected.candidate.constrained_width.min, 320)
        self.assertIsNone(rejected.candidate.constrained_width.max)


class FitnessAndSettingTests(unittest.TestCase):
    def test_profile_fitness(self) -> None:
        basic = parse_constraint_set({"width": 1280, "height": 720, "frameRate": 60})
        fitness = _candidate().fitness(basic)
        self.assertAlmostEqual(fitness, 0.5 + 240.0 / 720.0 + 0.5)

    def test_device_fitness(self) -> None:
        basic = parse_constraint_set({"facingMode": "environment", "groupId": "g0"})
        self.assertEqual(_candidate().fitness(basic), 1.0)

    def test_get_setting_reports_native_resolution_and_narrowed_rate(self) -> None:
        outcome = _candidate().apply_constraint_set(parse_constraint_set({"frameRate": {"min": 15}}))
        settings = outcome.candidate.get_setting()
        self.assertEqual(
            settings,
            CaptureSettings(
                device_id="cam0",
                width=640,
                height=480,
                frame_rate_min=15.0,
                frame_rate_max=30.0,
                pixel_format=PixelFormat.YUYV,
            ),
        )
        self.assertEqual(
            settings.to_dict(),
            {
                "deviceId": "cam0",
                "width": 640,
                "height": 480,
                "frameRateMin": 15.0,
                "frameRateMax": 30.0,
                "pixelFormat": "yuyv",
            },
        )
        self.assertEqual(
            str(settings),
            "CaptureSettings {deviceId: cam0, resolution: 640x480, format: yuyv, framerate: 15-30}",
        )


class DeviceIdentityTests(unittest.TestCase):
    def test_device_and_group_ids(self) -> None:
        device = _device()
        self.assertIsNone(device_satisfies_constraint_set(device, parse_constraint_set({"deviceId": "other"})))
        self.assertEqual(
            device_satisfies_constraint_set(device, parse_constraint_set({"deviceId": {"exact": "other"}})),
            "deviceId",
        )
        self.assertEqual(
            device_satisfies_constraint_set(device, parse_constraint_set({"groupId": "g1"}, NakedValue.EXACT)),
            "groupId",
        )

    def test_facing_mode(self) -> None:
        exact_user = parse_constraint_set({"facingMode": {"exact": "user"}})
        ideal_user = parse_constraint_set({"facingMode": "user"})
        self.assertIsNone(device_satisfies_constraint_set(_device(FacingMode.USER), exact_user))
        self.assertEqual(device_satisfies_constraint_set(_device(FacingMode.RIGHT), exact_user), "facingMode")
        self.assertEqual(device_satisfies_constraint_set(_device(FacingMode.NONE), exact_user), "facingMode")
        self.assertIsNone(device_satisfies_constraint_set(_device(FacingMode.NONE), ideal_user))


if __name__ == "__main__":
    unittest.main()
