import math
import unittest
from core import compliance
from core.config import get_voltage_drop_limit
from core.converters import (
    AWG_TO_MM2, awg_to_mm2, convert_length_unit, convert_power_unit, convert_temperature,
    find_minimum_metric_size, mm2_to_awg, normalize_awg,
)
from core.derating import compose_derating, lookup_or_neutral
from core.models import StandardId, VoltageDropCategory, VoltageSystem
from core.selector import voltage_drop
from standards import iec_tables, nec_tables

class TestConverters(unittest.TestCase):

    def test_awg_round_trip(self):
        for gauge in AWG_TO_MM2:
            self.assertEqual(mm2_to_awg(awg_to_mm2(gauge)), gauge)

    def test_awg_through_metric_sizes(self):
        print("\n--- TEST: AWG -> mm2 normalizado -> AWG ---")
        results = {g: mm2_to_awg(find_minimum_metric_size(awg_to_mm2(g))) for g in ("14", "12", "10", "8", "6", "4")}
        print(results)
        for gauge in ("14", "12", "10", "8", "6"):
            self.assertEqual(results[gauge], gauge)
        # 21.2 mm2 rounds up to 25 mm2, nearest to 3 AWG
        self.assertEqual(results["4"], "3")

    def test_awg_labels(self):
        self.assertEqual(normalize_awg("6 AWG"), "6")
        self.assertEqual(awg_to_mm2("250 kcmil"), 127.0)
        with self.assertRaises(ValueError):
            awg_to_mm2("7")

    def test_metric_size_bounds(self):
        self.assertEqual(find_minimum_metric_size(13.3), 16)
        self.assertEqual(find_minimum_metric_size(900), 500)

    def test_units(self):
        self.assertAlmostEqual(convert_length_unit(100, "ft"), 30.48)
        self.assertAlmostEqual(convert_length_unit(10, "yd"), 9.144)
        self.assertAlmostEqual(convert_temperature(212, "F"), 100.0)
        with self.assertRaises(ValueError):
            convert_length_unit(1, "furlong")
        with self.assertRaises(ValueError):
            convert_temperature(1, "K")

    def test_power_units(self):
        self.assertEqual(convert_power_unit(5, "HP", 230, 1, 1.0), (3730.0, None))
        self.assertEqual(convert_power_unit(10, "A", 230, 1, 1.0), (2300.0, 10))
        watts, amps = convert_power_unit(10, "A", 400, 3, 0.8)
        self.assertAlmostEqual(watts, 10 * 400 * math.sqrt(3) * 0.8)

class TestDeratingPolicy(unittest.TestCase):

    def test_unknown_keys_fail_open(self):
        self.assertEqual(lookup_or_neutral({"a": 0.5}, "b", "test"), 1.0)
        self.assertEqual(nec_tables.get_temp_correction(40, 80), 1.0)
        self.assertEqual(iec_tables.get_temp_correction(40, 60), 1.0)
        self.assertEqual(iec_tables.get_installation_factor("Z9"), 1.0)

    def test_composition(self):
        factors = compose_derating(temperature=0.9, grouping=0.8, material=0.78)
        self.assertAlmostEqual(factors.total, 0.9 * 0.8 * 0.78)
        self.assertEqual(factors.thermal_resistivity, 1.0)

class TestVoltageDrop(unittest.TestCase):

    def test_topologies(self):
        _, single = voltage_drop(10, 100, 5.0, 230, VoltageSystem.SINGLE_PHASE)
        _, three = voltage_drop(10, 100, 5.0, 230, VoltageSystem.THREE_PHASE)
        self.assertAlmostEqual(three / single, math.sqrt(3) / 2)

    def test_reactance_term(self):
        volts, _ = voltage_drop(10, 1000, 1.0, 400, VoltageSystem.THREE_PHASE, pf=0.8, x_ohm_per_km=0.1)
        self.assertAlmostEqual(volts, math.sqrt(3) * 10 * (0.8 + 0.1 * 0.6))

    def test_limits(self):
        self.assertEqual(get_voltage_drop_limit(StandardId.NEC, VoltageDropCategory.NORMAL), 3.0)
        self.assertEqual(get_voltage_drop_limit(StandardId.IEC, VoltageDropCategory.CRITICAL), 2.0)
        self.assertEqual(get_voltage_drop_limit(StandardId.DC_TELECOM, VoltageDropCategory.SENSITIVE), 0.5)

class TestCompliance(unittest.TestCase):

    def test_flags(self):
        flags = compliance.evaluate(ampacity=True, voltage_drop=False)
        self.assertFalse(flags.compliant)
        self.assertEqual(flags.failed(), ["voltage_drop"])
        self.assertNotIn("fill", flags.applicable())

    def test_not_applicable_checks_ignored(self):
        self.assertTrue(compliance.evaluate(ampacity=True, wire_compatible=None).compliant)

if __name__ == '__main__':
    unittest.main()
