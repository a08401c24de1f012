import unittest
from core.errors import InputValidationError, NoSuitableConduitError, UnsupportedStandardError
from core.models import ConduitFillInput, StandardId, WireEntry
from core.router import convert_wire_entries, size_conduit_fill
from standards.conduit_fill import get_fill_limit
from standards.nec_tables import NEC_CONDUIT_SIZES

class TestConduitFill(unittest.TestCase):

    def test_nec_emt(self):
        print("\n--- TEST: Ducto EMT, 3 x 6 AWG + 1 x 16 AWG THHN ---")
        res = size_conduit_fill(ConduitFillInput(
            wires=[WireEntry("6", 3, "THHN"), WireEntry("16", 1, "THHN")],
            conduit_type="EMT", standard="NEC",
        ))
        print(f"Trade size: {res.trade_size} | Fill: {res.fill_percent:.2f}% | Area: {res.total_wire_area:.4f} {res.area_unit}")

        self.assertAlmostEqual(res.total_wire_area, 0.1593, places=4)
        self.assertEqual(res.trade_size, "3/4")
        self.assertAlmostEqual(res.fill_percent, 29.89, delta=0.01)
        self.assertEqual(res.max_fill_percent, 40.0)
        self.assertEqual(res.area_unit, "in²")
        self.assertTrue(res.compliance.compliant)

    def test_iec_pvc_with_awg_entries(self):
        print("\n--- TEST: Ducto PVC IEC con calibres AWG convertidos ---")
        res = size_conduit_fill(ConduitFillInput(
            wires=[WireEntry("6", 3, "THHN", StandardId.NEC), WireEntry("16", 1, "THHN", StandardId.NEC)],
            conduit_type="PVC", standard="IEC",
        ))
        gauges = [(w.gauge, w.insulation, w.converted) for w in res.wires]
        print(f"Converted: {gauges} | Trade size: {res.trade_size}")

        self.assertEqual(gauges, [("16", "PVC", True), ("1.5", "PVC", True)])
        self.assertAlmostEqual(res.total_wire_area, 105.94, places=2)
        self.assertEqual(res.trade_size, "25")
        self.assertEqual(res.area_unit, "mm²")

    def test_default_standard_is_iec(self):
        res = size_conduit_fill(ConduitFillInput(wires=[WireEntry("2.5", 3, "PVC")], conduit_type="PVC"))
        self.assertEqual(res.standard, StandardId.IEC)
        self.assertEqual(res.trade_size, "16")

    def test_future_reserve(self):
        wires = [WireEntry("4", 3, "THHN")]
        plain = size_conduit_fill(ConduitFillInput(wires=wires, conduit_type="EMT", standard="NEC"))
        reserved = size_conduit_fill(ConduitFillInput(wires=wires, conduit_type="EMT", standard="NEC",
                                                      future_fill_reserve=50))
        self.assertEqual(plain.trade_size, "1")
        self.assertEqual(reserved.trade_size, "1-1/4")
        # Reported fill includes the reserve, the area the 40% limit is checked against
        self.assertAlmostEqual(reserved.total_wire_area, 0.2472, places=6)
        self.assertAlmostEqual(reserved.required_wire_area, 0.2472 * 1.5, places=6)
        self.assertAlmostEqual(reserved.fill_percent, 0.2472 * 1.5 / 1.496 * 100, places=6)
        self.assertLessEqual(reserved.fill_percent, reserved.max_fill_percent)
        # 1" EMT would hold the wires alone but not with the reserve
        self.assertFalse(reserved.alternatives[2].compliant)
        self.assertTrue(plain.alternatives[2].compliant)

    def test_alternatives_cover_every_trade_size(self):
        res = size_conduit_fill(ConduitFillInput(
            wires=[WireEntry("6", 3, "THHN"), WireEntry("16", 1, "THHN")], conduit_type="EMT", standard="NEC",
        ))
        self.assertEqual([a.trade_size for a in res.alternatives], list(NEC_CONDUIT_SIZES))
        self.assertFalse(res.alternatives[0].compliant)
        self.assertAlmostEqual(res.alternatives[0].fill_percent, 0.1593 / 0.304 * 100, delta=0.01)
        self.assertTrue(res.alternatives[1].compliant)
        self.assertAlmostEqual(res.alternatives[1].fill_percent, res.fill_percent)

    def test_requested_conduit_size(self):
        print("\n--- TEST: Verificación de un ducto EMT de tamaño fijo ---")
        wires = [WireEntry("6", 3, "THHN"), WireEntry("16", 1, "THHN")]
        small = size_conduit_fill(ConduitFillInput(wires=wires, conduit_type="EMT", standard="NEC", conduit_size="1/2"))
        print(f"1/2 EMT: {small.fill_percent:.1f}% | fill ok: {small.compliance.fill}")
        # Overfilled sizes are reported, not rejected
        self.assertEqual(small.trade_size, "1/2")
        self.assertAlmostEqual(small.fill_percent, 0.1593 / 0.304 * 100, delta=0.01)
        self.assertFalse(small.compliance.fill)
        self.assertFalse(small.compliance.compliant)

        large = size_conduit_fill(ConduitFillInput(wires=wires, conduit_type="EMT", standard="NEC", conduit_size="1"))
        self.assertEqual(large.trade_size, "1")
        self.assertTrue(large.compliance.fill)

    def test_unknown_conduit_size(self):
        with self.assertRaises(InputValidationError) as ctx:
            size_conduit_fill(ConduitFillInput(wires=[WireEntry("12", 3, "THHN")], conduit_type="EMT",
                                               standard="NEC", conduit_size="5"))
        self.assertIn("Conduit size 5 not found for type EMT", ctx.exception.messages)

    def test_single_conductor_rule(self):
        res = size_conduit_fill(ConduitFillInput(wires=[WireEntry("1/0", 1, "THHN")], conduit_type="EMT", standard="NEC"))
        self.assertEqual(res.max_fill_percent, 53.0)
        self.assertEqual(res.fill_rule, "1 conductor: 53%")
        self.assertEqual(res.trade_size, "3/4")

    def test_fill_limits(self):
        self.assertEqual(get_fill_limit(1)[0], 53.0)
        self.assertEqual(get_fill_limit(2)[0], 31.0)
        self.assertEqual(get_fill_limit(3)[0], 40.0)

    def test_temperature_outside_application_range(self):
        res = size_conduit_fill(ConduitFillInput(wires=[WireEntry("12", 3, "THHN")], conduit_type="PVC",
                                                 standard="NEC", application="data_center", ambient_temperature=35))
        self.assertFalse(res.compliance.temperature)
        self.assertTrue(res.compliance.fill)

    def test_too_many_wires(self):
        with self.assertRaises(NoSuitableConduitError) as ctx:
            size_conduit_fill(ConduitFillInput(wires=[WireEntry("500", 100, "THHN")], conduit_type="EMT", standard="NEC"))
        self.assertEqual(ctx.exception.largest_size, "4")

    def test_conduit_type_of_other_standard(self):
        with self.assertRaises(InputValidationError) as ctx:
            size_conduit_fill(ConduitFillInput(wires=[WireEntry("2.5", 3, "PVC")], conduit_type="EMT", standard="IEC"))
        self.assertIn("Unknown IEC conduit type: EMT", ctx.exception.messages)

    def test_dc_standard_rejected(self):
        with self.assertRaises(UnsupportedStandardError):
            size_conduit_fill(ConduitFillInput(wires=[WireEntry("12", 1, "THHN")], conduit_type="PVC",
                                               standard="DC_SOLAR"))

    def test_convert_entries_between_standards(self):
        metric = convert_wire_entries([WireEntry("6", 2, "THHN")], "NEC", "IEC")
        self.assertEqual(metric[0].gauge, "16")
        self.assertEqual(metric[0].insulation, "PVC")
        self.assertEqual(metric[0].quantity, 2)
        self.assertEqual(metric[0].gauge_standard, StandardId.IEC)

        back = convert_wire_entries(metric, "IEC", "NEC")
        self.assertEqual(back[0].gauge, "6")
        self.assertEqual(back[0].insulation, "THHN")

if __name__ == '__main__':
    unittest.main()
