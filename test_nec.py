import unittest
from core.errors import NoSuitableBreakerError, NoSuitableConductorError
from core.models import (
    ApplicationType, BreakerInput, ConductorInput, ConductorMaterial, DutyCycle, SolarConfiguration,
    StandardId, TemperatureUnit, VoltageSystem,
)
from core.router import size_breaker, size_conductor
from standards.nec_tables import (
    NEC_CONDUCTORS, get_grouping_factor, get_installation_factor, get_temp_correction,
)

SIZES = [c.size for c in NEC_CONDUCTORS]

def nec_input(**overrides):
    fields = dict(
        standard=StandardId.NEC, voltage=120, circuit_length=75, load_current=20,
        voltage_system=VoltageSystem.SINGLE_PHASE, ambient_temperature=86, number_of_conductors=3,
    )
    fields.update(overrides)
    return ConductorInput(**fields)

class TestNECConductor(unittest.TestCase):

    def test_branch_circuit_voltage_drop_governs(self):
        print("\n--- TEST: 20A continuo, 75 ft, 120V ---")
        res = size_conductor(nec_input())

        # 86°F = 30°C, 3 conductors: no derating
        self.assertAlmostEqual(res.ambient_c, 30.0, places=6)
        self.assertAlmostEqual(res.factors.total, 1.0)
        self.assertAlmostEqual(res.design_current, 25.0)

        # 12 AWG carries 25A at 75°C but drops ~4.8%; 10 AWG drops 3.03%
        print(f"Size: {res.size} | VD: {res.voltage_drop_percent:.2f}%")
        self.assertEqual(res.size, "8")
        self.assertAlmostEqual(res.voltage_drop_percent, 1.91, delta=0.01)
        self.assertEqual(res.alternatives[0].size, "12")
        self.assertAlmostEqual(res.alternatives[0].voltage_drop_percent, 4.83, delta=0.02)
        self.assertAlmostEqual(res.alternatives[1].voltage_drop_percent, 3.03, delta=0.01)
        self.assertTrue(res.compliance.compliant)

    def test_continuous_multiplier_can_be_disabled(self):
        res = size_conductor(nec_input(include_continuous_multiplier=False, circuit_length=10))
        self.assertAlmostEqual(res.design_current, 20.0)
        self.assertEqual(res.size, "14")

        res = size_conductor(nec_input(duty_cycle=DutyCycle.INTERMITTENT, circuit_length=10))
        self.assertAlmostEqual(res.design_current, 20.0)

    def test_temp_derating(self):
        print("\n--- TEST: Derating por Temperatura (30C vs 50C) ---")
        base = dict(voltage=240, circuit_length=10, load_current=40, temperature_unit=TemperatureUnit.CELSIUS)

        res_30 = size_conductor(nec_input(ambient_temperature=30, **base))
        res_50 = size_conductor(nec_input(ambient_temperature=50, **base))
        print(f"30C Size: {res_30.size} | 50C Size: {res_50.size} ({res_50.factors.describe()})")

        self.assertEqual(res_30.size, "8")
        self.assertAlmostEqual(res_50.factors.temperature, 0.75)
        # 50A design / 0.75 = 66.7A -> 4 AWG (85A)
        self.assertEqual(res_50.size, "4")
        self.assertAlmostEqual(res_50.required_ampacity, 50 / 0.75, places=6)

    def test_grouping_adjustment(self):
        res = size_conductor(nec_input(number_of_conductors=7, circuit_length=10))
        self.assertAlmostEqual(res.factors.grouping, 0.70)
        self.assertGreaterEqual(res.adjusted_ampacity, res.design_current)

    def test_aluminum_derates_and_upsizes(self):
        cu = size_conductor(nec_input(load_current=60, voltage=240, circuit_length=20))
        al = size_conductor(nec_input(load_current=60, voltage=240, circuit_length=20,
                                      conductor_material=ConductorMaterial.ALUMINUM))
        self.assertAlmostEqual(al.factors.material, 0.78)
        self.assertGreater(SIZES.index(al.size), SIZES.index(cu.size))

    def test_three_phase_power_input(self):
        # 30kW 480V 3Ph PF 0.9 -> 40.1A
        res = size_conductor(nec_input(load_current=None, load_power=30000, voltage=480,
                                       voltage_system=VoltageSystem.THREE_PHASE, power_factor=0.9,
                                       circuit_length=50))
        self.assertAlmostEqual(res.design_current, 30000 / (3 ** 0.5 * 480 * 0.9) * 1.25, places=6)
        self.assertTrue(res.compliance.ampacity)

    def test_monotonic_in_load_current(self):
        previous = 0
        for amps in range(5, 300, 15):
            res = size_conductor(nec_input(load_current=amps, voltage=480, circuit_length=50))
            index = SIZES.index(res.size)
            self.assertGreaterEqual(index, previous, f"{amps}A gave {res.size}")
            previous = index

    def test_idempotent(self):
        inp = nec_input()
        self.assertEqual(size_conductor(inp), size_conductor(inp))

    def test_no_conductor_large_enough(self):
        with self.assertRaises(NoSuitableConductorError) as ctx:
            size_conductor(nec_input(load_current=2000, voltage=480, circuit_length=10))
        self.assertEqual(ctx.exception.largest_size, "1000")
        self.assertIn("ampacity", ctx.exception.failed_constraints)

    def test_ambient_beyond_insulation_rating(self):
        # 75°C insulation is not permitted above 70°C ambient
        with self.assertRaises(NoSuitableConductorError):
            size_conductor(nec_input(ambient_temperature=80, temperature_unit=TemperatureUnit.CELSIUS))

    def test_cold_ambient_outside_range_is_flagged(self):
        res = size_conductor(nec_input(ambient_temperature=-45, temperature_unit=TemperatureUnit.CELSIUS,
                                       circuit_length=10))
        self.assertFalse(res.compliance.temperature)
        self.assertFalse(res.compliance.compliant)

class TestNECTables(unittest.TestCase):

    def test_temperature_buckets(self):
        self.assertEqual(get_temp_correction(30, 75), 1.0)
        self.assertEqual(get_temp_correction(30.5, 90), 0.96)
        self.assertEqual(get_temp_correction(0, 60), 1.29)
        self.assertEqual(get_temp_correction(95, 90), 0.0)

    def test_unknown_keys_fail_open(self):
        self.assertEqual(get_temp_correction(40, 80), 1.0)
        self.assertEqual(get_installation_factor("aerial_messenger"), 1.0)

    def test_grouping_buckets(self):
        self.assertEqual(get_grouping_factor(1), 1.0)
        self.assertEqual(get_grouping_factor(4), 0.80)
        self.assertEqual(get_grouping_factor(20), 0.50)
        self.assertEqual(get_grouping_factor(41), 0.35)

    def test_resistance_converted_to_ohm_per_km(self):
        spec = next(c for c in NEC_CONDUCTORS if c.size == "12")
        self.assertAlmostEqual(spec.resistance_ohm_per_km, 1.93 / 0.3048, places=6)
        self.assertEqual(spec.base_ampacity(75), 25)

class TestNECBreaker(unittest.TestCase):

    def breaker(self, **fields):
        fields.setdefault("standard", "NEC")
        return size_breaker(BreakerInput(**fields))

    def test_solar_parallel_array(self):
        print("\n--- TEST: Solar NEC 690.8, 2 paneles 9.5A en paralelo ---")
        res = self.breaker(application=ApplicationType.SOLAR, panel_isc=9.5, number_of_panels=2)
        print(f"Adjusted: {res.adjusted_current}A -> {res.device.standard} {res.rating}A")
        self.assertAlmostEqual(res.base_current, 19.0)
        self.assertAlmostEqual(res.adjusted_current, 29.64)
        self.assertEqual(res.rating, 30)
        self.assertEqual(res.device.standard, "UL489")

    def test_solar_series_string(self):
        res = self.breaker(application=ApplicationType.SOLAR, panel_isc=9.5, number_of_panels=2,
                           solar_configuration=SolarConfiguration.SERIES)
        self.assertAlmostEqual(res.adjusted_current, 14.82)
        self.assertEqual(res.rating, 20)

    def test_marine_prefers_abyc(self):
        res = self.breaker(application=ApplicationType.MARINE, load_current=10, system_voltage=120)
        self.assertFalse(res.is_automotive_fuse)
        self.assertEqual(res.rating, 15)
        self.assertEqual(res.device.standard, "ABYC")
        self.assertEqual([d.standard for d in res.alternatives][:1], ["UL489"])

    def test_industrial_and_battery(self):
        self.assertEqual(self.breaker(application=ApplicationType.INDUSTRIAL, load_current=100).rating, 125)
        # 20 x 1.40 x 1.1 inrush = 30.8A
        battery = self.breaker(application=ApplicationType.BATTERY, load_current=20)
        self.assertAlmostEqual(battery.adjusted_current, 30.8)
        self.assertEqual(battery.rating, 32)

    def test_hot_ambient(self):
        res = self.breaker(application=ApplicationType.INDUSTRIAL, load_current=20, ambient_temperature=50)
        self.assertAlmostEqual(res.temperature_derating, 0.90)
        self.assertAlmostEqual(res.adjusted_current, 27.78)
        self.assertEqual(res.rating, 32)

    def test_wire_not_protected(self):
        res = self.breaker(application=ApplicationType.INDUSTRIAL, load_current=20, wire_gauge="12")
        self.assertEqual(res.rating, 32)
        self.assertFalse(res.compliance.wire_compatible)
        self.assertFalse(res.compliance.compliant)

    def test_breaker_temperature_rating(self):
        print("\n--- TEST: Breaker a 85°C, UL489 (80°C) vs SAE (125°C) ---")
        hot = self.breaker(application=ApplicationType.INDUSTRIAL, load_current=10, ambient_temperature=85)
        self.assertEqual(hot.device.standard, "UL489")
        self.assertEqual(hot.device.temperature_rating, 80)
        self.assertFalse(hot.compliance.temperature)
        self.assertIn("temperature", hot.compliance.failed())

        # 36V is outside the blade fuse systems, so the SAE breaker is used
        sae = self.breaker(application=ApplicationType.AUTOMOTIVE, load_current=10, system_voltage=36,
                           ambient_temperature=85)
        print(f"SAE: {sae.rating:g}A | temp ok: {sae.compliance.temperature}")
        self.assertEqual(sae.device.standard, "SAE")
        self.assertEqual(sae.rating, 25)
        self.assertTrue(sae.compliance.temperature)

    def test_rating_ceiling_separate_from_application(self):
        # 10A x 1.15 = 11.5A -> 15A, above the 1.2 x 11.5A telecom ceiling
        res = self.breaker(application=ApplicationType.TELECOM, load_current=10, system_voltage=48)
        self.assertEqual(res.rating, 15)
        self.assertTrue(res.compliance.application)
        self.assertFalse(res.compliance.rating_ceiling)
        self.assertEqual(res.compliance.failed(), ["rating_ceiling"])

        plain = self.breaker(application=ApplicationType.INDUSTRIAL, load_current=10)
        self.assertTrue(plain.compliance.application)
        self.assertIsNone(plain.compliance.rating_ceiling)

    def test_no_breaker_large_enough(self):
        with self.assertRaises(NoSuitableBreakerError) as ctx:
            self.breaker(application=ApplicationType.INDUSTRIAL, load_current=300)
        self.assertEqual(ctx.exception.largest_rating, 225)

if __name__ == '__main__':
    unittest.main()
