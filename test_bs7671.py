import math
import unittest
from core.errors import InputValidationError
from core.models import ConductorInput, StandardId, VoltageSystem
from core.router import size_conductor, validate_input
from standards.bs7671_tables import BS7671_CONDUCTORS, apply_diversity, get_installation_factor

def bs_input(**overrides):
    fields = dict(standard=StandardId.BS7671, voltage=230, circuit_length=20, load_current=20,
                  installation_method="C", ambient_temperature=30)
    fields.update(overrides)
    return ConductorInput(**fields)

class TestBS7671Conductor(unittest.TestCase):

    def test_final_circuit_clipped_direct(self):
        print("\n--- TEST: BS 7671 20A, 20m, 230V, Método C ---")
        res = size_conductor(bs_input())
        print(f"Size: {res.size} mm2 | VD: {res.voltage_drop_percent:.3f}% | {res.reference}")

        self.assertEqual(res.standard, StandardId.BS7671)
        self.assertAlmostEqual(res.factors.total, 1.0)
        # 1.5 mm2 carries 17.5A at 70°C
        self.assertEqual(res.size, "2.5")
        self.assertEqual(res.base_ampacity, 24)
        self.assertAlmostEqual(res.voltage_drop_percent, 2 * 20 * 0.020 * 7.41 / 230 * 100, places=6)
        self.assertEqual(res.voltage_drop_limit, 4.0)
        self.assertIn("BS 7671:2018+A2:2022 Method C", res.reference)
        self.assertTrue(res.compliance.compliant)

    def test_uk_defaults(self):
        res = size_conductor(bs_input(installation_method=None, ambient_temperature=None))
        # 20°C UK reference ambient, 70°C column
        self.assertAlmostEqual(res.ambient_c, 20.0)
        self.assertAlmostEqual(res.factors.temperature, 1.08)
        self.assertIn("Method A1", res.reference)
        self.assertAlmostEqual(res.adjusted_ampacity, 24 * 1.08)

    def test_lower_ratings_than_iec(self):
        bs = size_conductor(bs_input(load_current=25, circuit_length=2))
        iec = size_conductor(bs_input(standard=StandardId.IEC, load_current=25, circuit_length=2, temperature_rating=70))
        self.assertEqual(bs.size, "4")
        self.assertEqual(iec.size, "2.5")

    def test_diversity_lowers_design_current(self):
        res = size_conductor(bs_input(load_current=32, load_type="socket_outlets"))
        self.assertAlmostEqual(res.design_current, 12.8)
        self.assertIn("Diversity: socket_outlets", res.reference)

        plain = size_conductor(bs_input(load_current=32))
        self.assertAlmostEqual(plain.design_current, 32.0)

    def test_grouping(self):
        self.assertAlmostEqual(size_conductor(bs_input(number_of_conductors=4)).factors.grouping, 0.65)
        self.assertAlmostEqual(size_conductor(bs_input(number_of_conductors=4, grouping_factor=0.5)).factors.grouping, 0.5)

    def test_hot_ambient_flagged(self):
        res = size_conductor(bs_input(ambient_temperature=75))
        self.assertAlmostEqual(res.factors.temperature, 0.58)
        # 20A / 0.58 = 34.5A -> 6 mm2 (41A)
        self.assertEqual(res.size, "6")
        self.assertFalse(res.compliance.temperature)
        self.assertFalse(res.compliance.compliant)

    def test_three_phase_power_input(self):
        res = size_conductor(bs_input(load_current=None, load_power=11000, voltage=400, power_factor=0.9,
                                      voltage_system=VoltageSystem.THREE_PHASE))
        self.assertAlmostEqual(res.design_current, 11000 / (math.sqrt(3) * 400 * 0.9), places=6)
        self.assertTrue(res.compliance.ampacity)

    def test_validation(self):
        errors = validate_input(bs_input(temperature_rating=60, load_type="kettle", installation_method="Z",
                                         voltage_system=VoltageSystem.DC))
        for e in errors:
            print(f"  - {e}")
        self.assertIn("BS 7671 temperature rating must be 70 or 90°C", errors)
        self.assertIn("Unknown UK load type: kettle", errors)
        self.assertIn("Unknown BS 7671 installation method: Z", errors)
        self.assertIn("BS 7671 AC sizing does not accept DC systems; use a DC standard", errors)

        with self.assertRaises(InputValidationError):
            size_conductor(bs_input(load_type="kettle"))

class TestBS7671Tables(unittest.TestCase):

    def test_diversity(self):
        self.assertAlmostEqual(apply_diversity(10, "lighting"), 6.6)
        self.assertAlmostEqual(apply_diversity(20, "water_heating"), 20.0)
        self.assertEqual(apply_diversity(20, None), 20)
        # Cooking: first 10A plus 30% of the remainder
        self.assertAlmostEqual(apply_diversity(40, "cooking"), 19.0)
        self.assertAlmostEqual(apply_diversity(8, "cooking"), 8.0)

    def test_installation_factors(self):
        self.assertEqual(get_installation_factor("E"), 1.2)
        self.assertEqual(get_installation_factor("Z9"), 1.0)

    def test_cable_table(self):
        sizes = [c.size for c in BS7671_CONDUCTORS]
        self.assertEqual(sizes[0], "1")
        self.assertEqual(sizes[-1], "630")
        spec = BS7671_CONDUCTORS[sizes.index("2.5")]
        self.assertEqual(spec.base_ampacity(70), 24)
        self.assertEqual(spec.reactance_ohm_per_km, 0.08)

if __name__ == '__main__':
    unittest.main()
