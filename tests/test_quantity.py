import threading
import unittest

import numpy as np

from quantifier_pkg.dimensional_analysis import (
    FORCE,
    VELOCITY,
    BaseUnit,
    PhysicalQuantity,
    get_registry,
)
from quantifier_pkg.types import (
    IncomparableUnitsError,
    IncompatibleUnitsError,
    ParseError,
    UnitNotFoundError,
)

PQ = PhysicalQuantity


class TestConstruction(unittest.TestCase):
    def test_initialization(self):
        p = PQ(634, {"m": 1, "s": -1})
        self.assertIsInstance(p, PhysicalQuantity)
        self.assertEqual(634, p.quantity)

    def test_unit_spec_forms_agree(self):
        registry = get_registry()
        by_symbol = PQ(3, "mm")
        self.assertEqual(by_symbol, PQ(3, {"mm": 1}))
        self.assertEqual(by_symbol, PQ(3, registry.resolve("mm")))
        self.assertEqual(PQ(3, "m/s^2"), PQ(3, {"m": 1, "s": -2}))
        self.assertEqual(PQ(3, "m kg / s^2"), PQ(3, {"kg": 1, "m": 1, "s": -2}))

    def test_magnitude_stored_as_float(self):
        self.assertIsInstance(PQ(2, "m").quantity, float)
        self.assertIsInstance(PQ(np.float32(2.5), "m").quantity, float)

    def test_stored_in_base_units(self):
        q = PQ(2, "km/hr")
        self.assertTrue(all(isinstance(u, BaseUnit) for u in q.powers))
        self.assertAlmostEqual(q.quantity, 2000 / 3600)

    def test_unknown_unit(self):
        with self.assertRaises(UnitNotFoundError):
            PQ(1, "furlong")

    def test_bad_unit_spec(self):
        with self.assertRaises(TypeError):
            PQ(1, 5)
        with self.assertRaises(ValueError):
            PQ(1, {"m": 1.5})

    def test_preferred_units_override(self):
        self.assertEqual(str(PQ(1500, "m", preferred_units="km")), "1.5 km")

    def test_symbol_with_non_word_characters(self):
        self.assertEqual(PQ(60, "°C"), PQ(60, "cel"))
        self.assertEqual(str(PQ(60, "°C")), "60 cel")

    def test_parse(self):
        self.assertEqual(PQ.parse("2 m/s"), PQ(2, "m/s"))
        self.assertEqual(PQ.parse("1/4 km"), PQ(250, "m"))
        self.assertEqual(PQ.parse("0.5 1/s"), PQ(0.5, {"s": -1}))
        self.assertTrue(PQ.parse("7").is_dimensionless())
        with self.assertRaises(ParseError):
            PQ.parse("   ")
        with self.assertRaises(ParseError):
            PQ.parse("abc m")


class TestNormalization(unittest.TestCase):
    def test_high_powers(self):
        self.assertEqual(PQ(4, {"m": 3}), PQ(4e6, {"cm": 3}))
        self.assertEqual(PQ(12, {"m": 4}), PQ(12e12, {"mm": 4}))

    def test_negative_powers(self):
        self.assertEqual(PQ(1, "1/mm"), PQ(1000, "1/m"))
        self.assertEqual(str(PQ(1, "1/mm")), "1 1/mm")

    def test_temperatures(self):
        c = PQ(60, "cel")
        f = PQ(140, "fah")
        k = PQ(333.15, "K")
        self.assertEqual(k, c)
        self.assertEqual(k, f)

    def test_normalizing_normalized_quantity_is_noop(self):
        q = PQ(7.25, "mm^2/hr")
        again = PQ(q.quantity, q.powers)
        self.assertEqual(again.quantity, q.quantity)
        self.assertEqual(again.powers, q.powers)

    def test_rendering_does_not_mutate(self):
        q = PQ(4.8, "mm^2/s")
        quantity, powers, preferred = q.quantity, q.powers, q.preferred_units
        self.assertEqual(q.to_string(), "4.8 mm^2/s")
        q.to_string("html")
        self.assertEqual(q.quantity, quantity)
        self.assertEqual(q.powers, powers)
        self.assertEqual(q.preferred_units, preferred)

    def test_concurrent_rendering(self):
        q = PQ(2.5, "km/hr")
        results = []

        def render():
            for _ in range(500):
                results.append(q.to_string())

        threads = [threading.Thread(target=render) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(set(results), {"2.5 km/hr"})

    def test_round_trip(self):
        for magnitude, units in [(3.5, "km/hr"), (60, "cel"), (0.125, "lb/in^2"), (12, "mm^4")]:
            with self.subTest(units=units):
                q = PQ(magnitude, units)
                shown = float(q.to_string().split(" ")[0])
                self.assertEqual(PQ(shown, units), q)
                self.assertEqual(PQ.parse(str(q)), q)


class TestComparison(unittest.TestCase):
    def test_ordering(self):
        a = PQ(4321, "mm")
        b = PQ(4322, "mm")
        c = PQ(50, "m")
        e = PQ(1, "m")
        f = PQ(1, "yd")
        self.assertLess(a, b)
        self.assertLess(b, c)
        self.assertLess(f, e)
        self.assertGreaterEqual(c, b)
        self.assertLessEqual(PQ(1000, "mm"), PQ(1, "m"))
        self.assertEqual(PQ(1, "yd"), f)

    def test_incomparable(self):
        with self.assertRaises(IncomparableUnitsError):
            PQ(50, "m") < PQ(50, "kg")
        with self.assertRaises(TypeError):
            PQ(50, "m") >= PQ(50, "kg")

    def test_equality_ignores_preferred_units(self):
        self.assertEqual(PQ(1, "km"), PQ(1000, "m"))
        self.assertEqual(hash(PQ(1, "km")), hash(PQ(1000, "m")))
        self.assertEqual(len({PQ(1, "m"), PQ(100, "cm"), PQ(1000, "mm")}), 1)

    def test_equality_with_other_types(self):
        self.assertNotEqual(PQ(1, "m"), "1 m")
        self.assertNotEqual(PQ(1, "m"), 1)
        self.assertEqual(PQ(3, {}), 3)

    def test_dimensionless_hash_matches_plain_numbers(self):
        self.assertEqual(hash(PQ(3, {})), hash(3))
        self.assertEqual(hash(PQ(0.1 + 0.2, {})), hash(0.3))
        self.assertIn(3, {PQ(3, {})})
        self.assertEqual(len({PQ(2.5, {}), 2.5}), 1)


class TestArithmetic(unittest.TestCase):
    def test_addition_and_subtraction(self):
        a = PQ(8, "m")
        b = PQ(2.2, "m")
        self.assertEqual(PQ(10.2, "m"), a + b)
        self.assertEqual(PQ(5.8, "m"), a - b)
        self.assertEqual(PQ(1.5, "m"), PQ(1, "m") + PQ(500, "mm"))
        with self.assertRaises(IncompatibleUnitsError):
            a + PQ(4, "kg")
        with self.assertRaises(IncompatibleUnitsError):
            a - PQ(4, "kg")
        with self.assertRaises(IncompatibleUnitsError):
            a + 1

    def test_sum_keeps_left_preferred_units(self):
        self.assertEqual(str(PQ(1, "km") + PQ(500, "m")), "1.5 km")
        self.assertEqual(str(PQ(500, "m") + PQ(1, "km")), "1500 m")

    def test_inverse(self):
        a = PQ(8, {"m": 1, "s": -1})
        b = PQ(1.0 / 8.0, {"m": -1, "s": 1})
        self.assertEqual(b, a.inverse())
        self.assertEqual(str(PQ(2, "mm/s").inverse()), "500 s/m")
        with self.assertRaises(ZeroDivisionError):
            PQ(0, "m").inverse()

    def test_multiplication(self):
        a = PQ(8, "m")
        b = PQ(2, "kg")
        c = PQ(16, {"m": 1, "kg": 1})
        self.assertEqual(c, a * b)

    def test_division(self):
        a = PQ(32, {"m": 1, "s": -1})
        b = PQ(8, {"s": 1})
        self.assertEqual(PQ(4, {"m": 1, "s": -2}), a / b)

    def test_division_is_multiplication_by_inverse(self):
        a, b = PQ(10, "km"), PQ(2, "hr")
        self.assertEqual(str(a / b), str(a * b.inverse()))
        self.assertEqual(str(a / b), "0.00138888888889 km/s")
        self.assertEqual(str((a / b).to("km/hr")), "5 km/hr")

    def test_unit_disappearance(self):
        a = PQ(2, {"m": 1, "s": -1})
        b = PQ(4, {"s": 1})
        self.assertEqual(PQ(8, {"m": 1}), a * b)
        self.assertEqual(str(a * b), "8 m")
        self.assertTrue((PQ(3, "m") / PQ(1, "m")).is_dimensionless())

    def test_preservation_of_preferred_units(self):
        a = PQ(2, {"mm": 1, "s": -1})
        self.assertEqual("2 mm/s", a.to_string())
        b = PQ(48, {"mm": 1, "s": -1})
        self.assertEqual("50 mm/s", (a + b).to_string())
        self.assertEqual("96 mm^2/s^2", (a * b).to_string())

    def test_left_operand_preference_wins(self):
        self.assertEqual(str(PQ(1, "km") * PQ(500, "m")), "0.5 km^2")

    def test_scalars(self):
        self.assertEqual(PQ(2, "m") * 3, PQ(6, "m"))
        self.assertEqual(3 * PQ(2, "m"), PQ(6, "m"))
        self.assertEqual(PQ(6, "m") / 2, PQ(3, "m"))
        self.assertEqual(1 / PQ(2, "s"), PQ(0.5, "1/s"))
        self.assertEqual(str(PQ(2, "cm") * 2.5), "5 cm")

    def test_power(self):
        self.assertEqual(PQ(3, "m") ** 2, PQ(9, "m^2"))
        self.assertEqual(str(PQ(2, "cm") ** 2), "4 cm^2")
        self.assertEqual(PQ(2, "s") ** -1, PQ(0.5, "1/s"))
        self.assertEqual(PQ(2, "s") ** 0, PQ(1, {}))

    def test_unary(self):
        self.assertEqual(-PQ(2, "m"), PQ(-2, "m"))
        self.assertEqual(abs(PQ(-2, "mm")), PQ(2, "mm"))
        self.assertEqual(str(abs(PQ(-2, "mm"))), "2 mm")

    def test_operands_are_not_mutated(self):
        a = PQ(2, "mm")
        b = PQ(3, "mm")
        a + b
        a * b
        a / b
        self.assertEqual(str(a), "2 mm")
        self.assertEqual(str(b), "3 mm")


class TestConversion(unittest.TestCase):
    def test_convert_to(self):
        c = PQ(60, "cel")
        self.assertEqual("60 cel", c.to_string())
        c.convert_to("K")
        self.assertEqual("333.15 K", c.to_string())
        c.convert_to("fah")
        self.assertEqual("140 fah", c.to_string())

    def test_convert_composite(self):
        q = PQ(10, "m/s")
        self.assertEqual(str(q.convert_to("km/hr")), "36 km/hr")

    def test_convert_incompatible(self):
        with self.assertRaises(IncompatibleUnitsError):
            PQ(1, "m").convert_to("kg")

    def test_to_returns_copy(self):
        q = PQ(1, "km")
        self.assertEqual(str(q.to("m")), "1000 m")
        self.assertEqual(str(q), "1 km")
        self.assertEqual(str(PQ(1, "km/hr").to_base_units()), "0.277777777778 m/s")

    def test_magnitude_in_preferred_units(self):
        q = PQ(5, "in")
        self.assertAlmostEqual(q.magnitude, 5)
        self.assertAlmostEqual(q.quantity, 0.127)
        self.assertEqual([u.symbol for u in q.display_powers], ["in"])

    def test_transform(self):
        registry = get_registry()
        m = registry.resolve("m")
        mm = registry.resolve("mm")
        q = PQ(2, "m")
        transformed = q.transform(m.denormalize(mm))
        self.assertEqual(transformed, q)
        self.assertEqual(str(transformed), "2000 mm")
        with self.assertRaises(IncompatibleUnitsError):
            q.transform(mm.normalize())

    def test_dimension(self):
        self.assertEqual(PQ(1, "kg m/s^2").dimension, FORCE)
        self.assertEqual(PQ(1, "km/hr").dimension, VELOCITY)
        self.assertTrue(PQ(1, "km/hr").is_compatible("m/s"))
        self.assertTrue(PQ(1, "km/hr").is_compatible(PQ(3, "mi/s")))
        self.assertFalse(PQ(1, "km/hr").is_compatible("m/s^2"))


class TestRendering(unittest.TestCase):
    def test_to_string(self):
        a = PQ(2, {"m": 1, "s": -1})
        self.assertEqual("2 m/s", a.to_string())
        a = PQ(4.8, {"m": 2, "s": -1})
        self.assertEqual("4.8 m^2/s", a.to_string())
        self.assertEqual("4.8 m<sup>2</sup>/s", a.to_string("html"))
        self.assertEqual("4.8 m²/s", a.to_string("unicode"))

    def test_numerator_defaults_to_one(self):
        self.assertEqual(str(PQ(4, "1/s")), "4 1/s")
        self.assertEqual(str(PQ(4, {})), "4 1")

    def test_units_are_concatenated(self):
        self.assertEqual(str(PQ(16, "m kg")), "16 mkg")
        self.assertEqual(str(PQ(3, "kg m^2/s^2")), "3 kgm^2/s^2")

    def test_format_protocol(self):
        q = PQ(4.8, "m^2/s")
        self.assertEqual(f"{q}", "4.8 m^2/s")
        self.assertEqual(f"{q:html}", "4.8 m<sup>2</sup>/s")
        self.assertEqual(f"{q:.2f}", "4.80 m^2/s")
        self.assertEqual(repr(q), "PhysicalQuantity('4.8 m^2/s')")

    def test_precision(self):
        q = PQ(1, "km/hr").to("m/s")
        self.assertEqual(q.to_string(precision=3), "0.278 m/s")

    def test_unknown_style(self):
        with self.assertRaises(ValueError):
            PQ(1, "m").to_string("latex")


if __name__ == "__main__":
    unittest.main()
