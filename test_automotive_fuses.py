import unittest
from core.errors import NoSuitableBreakerError
from core.models import ApplicationType, BreakerInput, DutyCycle
from core.router import size_breaker
from standards.automotive_fuses import (
    fuse_current, get_temperature_derating, preferred_fuse_type, should_use_automotive_fuse,
)

class TestAutomotiveFuses(unittest.TestCase):

    def test_continuous_automotive_load(self):
        print("\n--- TEST: Fusible ISO 8820-3, 20A continuo 12V ---")
        res = size_breaker(BreakerInput(application=ApplicationType.AUTOMOTIVE, load_current=20, system_voltage=12))
        print(f"Fuse: {res.rating:g}A {res.device.fuse_type} ({res.device.color}) | {res.calculation_method}")

        self.assertTrue(res.is_automotive_fuse)
        self.assertEqual(res.standard, "ISO 8820-3")
        self.assertAlmostEqual(res.adjusted_current, 25.0)
        self.assertEqual(res.rating, 25)
        self.assertEqual(res.device.fuse_type, "regular")
        self.assertTrue(res.compliance.compliant)

    def test_48v_intermittent(self):
        res = size_breaker(BreakerInput(application=ApplicationType.AUTOMOTIVE, load_current=10, system_voltage=48,
                                        duty_cycle=DutyCycle.INTERMITTENT))
        # 10A x 1.10
        self.assertAlmostEqual(res.adjusted_current, 11.0)
        self.assertEqual(res.rating, 15)
        self.assertEqual(res.device.fuse_type, "regular")

    def test_power_input(self):
        # 102W / 12V / 0.85 = 10A
        res = size_breaker(BreakerInput(application=ApplicationType.AUTOMOTIVE, load_power=102, system_voltage=12))
        self.assertAlmostEqual(res.base_current, 10.0)
        self.assertEqual(res.rating, 15)

    def test_heat_derating(self):
        res = size_breaker(BreakerInput(application=ApplicationType.AUTOMOTIVE, load_current=20, system_voltage=12,
                                        ambient_temperature=60))
        self.assertAlmostEqual(res.temperature_derating, 0.90)
        self.assertAlmostEqual(res.adjusted_current, 27.78, delta=0.01)
        self.assertEqual(res.rating, 30)

    def test_marine_environment(self):
        res = size_breaker(BreakerInput(application=ApplicationType.MARINE, load_current=10, system_voltage=12,
                                        environment="marine"))
        self.assertAlmostEqual(res.adjusted_current, 13.125)
        self.assertEqual(res.rating, 15)
        self.assertIn("marine", res.device.applications)

    def test_wire_gauge_check(self):
        res = size_breaker(BreakerInput(application=ApplicationType.AUTOMOTIVE, load_current=20, system_voltage=12,
                                        wire_gauge="16"))
        self.assertFalse(res.compliance.wire_compatible)

    def test_led_load_above_catalog(self):
        with self.assertRaises(NoSuitableBreakerError) as ctx:
            size_breaker(BreakerInput(application=ApplicationType.LED, load_current=20, system_voltage=12))
        self.assertEqual(ctx.exception.largest_rating, 15)

    def test_large_load_goes_to_breaker(self):
        print("\n--- TEST: 100A continuo supera el fusible, pasa a breaker NEC ---")
        res = size_breaker(BreakerInput(application=ApplicationType.AUTOMOTIVE, standard="NEC",
                                        load_current=100, system_voltage=12))
        self.assertFalse(res.is_automotive_fuse)
        self.assertEqual(res.standard, "NEC")
        self.assertEqual(res.rating, 125)
        self.assertEqual(res.device.standard, "UL489")

    def test_route_uses_full_fuse_adjustment(self):
        print("\n--- TEST: 94A 24V, factor ISO 1.30 supera 120A, pasa a breaker ---")
        # 94A x 1.30 = 122.2A
        res = size_breaker(BreakerInput(application=ApplicationType.AUTOMOTIVE, standard="NEC",
                                        load_current=94, system_voltage=24))
        print(f"{res.standard} {res.rating:g}A | fuse: {res.is_automotive_fuse}")
        self.assertFalse(res.is_automotive_fuse)
        self.assertEqual(res.rating, 125)

        # 87A x 1.25 / 0.90 at 60°C = 120.8A
        hot = size_breaker(BreakerInput(application=ApplicationType.AUTOMOTIVE, standard="NEC",
                                        load_current=87, system_voltage=12, ambient_temperature=60))
        self.assertFalse(hot.is_automotive_fuse)
        self.assertEqual(hot.rating, 150)

    def test_largest_fuse_at_boundary(self):
        inp = BreakerInput(application=ApplicationType.AUTOMOTIVE, load_current=92, system_voltage=24)
        # 92A x 1.30 = 119.6A
        self.assertTrue(should_use_automotive_fuse(inp))
        res = size_breaker(inp)
        self.assertTrue(res.is_automotive_fuse)
        self.assertEqual(res.rating, 120)
        self.assertEqual(res.device.fuse_type, "maxi")
        self.assertAlmostEqual(fuse_current(inp)[3], res.adjusted_current)

    def test_guard(self):
        self.assertFalse(should_use_automotive_fuse(
            BreakerInput(application=ApplicationType.INDUSTRIAL, load_current=5, system_voltage=12)))
        self.assertFalse(should_use_automotive_fuse(
            BreakerInput(application=ApplicationType.MARINE, load_current=5, system_voltage=120)))
        self.assertFalse(should_use_automotive_fuse(
            BreakerInput(application=ApplicationType.AUTOMOTIVE, system_voltage=12)))
        self.assertTrue(should_use_automotive_fuse(
            BreakerInput(application=ApplicationType.LED, load_current=5)))

    def test_fuse_type_and_derating_helpers(self):
        self.assertEqual(preferred_fuse_type(7.5), "micro2")
        self.assertEqual(preferred_fuse_type(30), "regular")
        self.assertEqual(preferred_fuse_type(60), "maxi")
        self.assertEqual(get_temperature_derating(40), 1.0)
        self.assertEqual(get_temperature_derating(200), 0.5)

if __name__ == '__main__':
    unittest.main()
