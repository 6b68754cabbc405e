import unittest

from quantifier_pkg.dimensional_analysis import Transformation, get_registry
from quantifier_pkg.types import IncompatibleUnitsError, TransformationSumError


class TestTransformation(unittest.TestCase):
    """Transformation equality is decided on a fixed probe set.

    This is an intentional approximation: two different functions that agree
    on every probe compare equal.
    """

    def setUp(self):
        self.registry = get_registry()
        self.m = self.registry.resolve("m")
        self.mm = self.registry.resolve("mm")
        self.ft = self.registry.resolve("ft")
        self.kg = self.registry.resolve("kg")

    def test_equality(self):
        t1 = Transformation(self.mm, self.m, [lambda x: x * 2])
        t2 = Transformation(self.mm, self.m, [lambda x: x * 2])
        self.assertEqual(t1, t2)

        t1 = Transformation(self.mm, self.m, [lambda x: 0])
        t2 = Transformation(self.mm, self.m, [lambda x: 0])
        self.assertEqual(t1, t2)

        t1 = Transformation(self.mm, self.m, [lambda x: x * 2, lambda x: x / 2])
        t2 = Transformation(self.mm, self.m, [lambda x: x])
        self.assertEqual(t1, t2)

    def test_inequality(self):
        t1 = Transformation(self.mm, self.m, [lambda x: x * 2])
        self.assertNotEqual(t1, Transformation(self.mm, self.m, [lambda x: x * 3]))
        self.assertNotEqual(t1, Transformation(self.mm, self.ft, [lambda x: x * 2]))
        self.assertNotEqual(t1, "mm -> m")

    def test_tiny_scale_factors_are_distinguished(self):
        pm = self.registry.resolve("pm")
        self.assertNotEqual(pm.normalize(), Transformation(pm, self.m, [lambda x: x * 5e-12]))
        self.assertNotEqual(pm.normalize(), Transformation(pm, self.m, [lambda x: 0.0]))
        self.assertEqual(pm.normalize(), Transformation(pm, self.m, [lambda x: x / 1e12]))

    def test_affine_round_trip_matches_identity(self):
        fah = self.registry.resolve("fah")
        self.assertEqual(fah.normalize() + fah.denormalize(), Transformation.identity(fah))

    def test_sampled_equality_is_an_approximation(self):
        # Agrees with the identity on -1, 0, 1, 2 and 3.5 only.
        def almost_identity(x):
            return x if x in (-1, 0, 1, 2, 3.5) else 0

        t1 = Transformation(self.m, self.m, [almost_identity])
        self.assertEqual(t1, Transformation.identity(self.m))

    def test_single_callable_is_wrapped(self):
        t = Transformation(self.mm, self.m, lambda x: x / 1000.0)
        self.assertEqual(len(t.ops), 1)
        self.assertEqual(t(2500), 2.5)

    def test_addition(self):
        t1 = Transformation(self.mm, self.m, [lambda x: x / 1000.0])
        t2 = Transformation(self.m, self.ft, [lambda x: x * 0.3048])
        t3 = Transformation(self.mm, self.ft, [lambda x: x * 0.0003048])
        self.assertEqual(t3, t1 + t2)
        self.assertEqual((t1 + t2).ops, t1.ops + t2.ops)

    def test_addition_requires_chained_endpoints(self):
        t1 = Transformation(self.mm, self.m, [lambda x: x / 1000.0])
        with self.assertRaises(TransformationSumError):
            t1 + t1
        with self.assertRaises(TransformationSumError):
            t1 + (lambda x: x)

    def test_addition_is_associative(self):
        a = Transformation(self.mm, self.m, [lambda x: x / 1000.0])
        b = Transformation(self.m, self.ft, [lambda x: x / 0.3048])
        c = Transformation(self.ft, self.m, [lambda x: x * 0.3048])
        self.assertEqual((a + b) + c, a + (b + c))

    def test_apply_to_quantity_folds_left_to_right(self):
        t = Transformation(self.m, self.m, [lambda x: x + 1, lambda x: x * 10])
        self.assertEqual(t.apply_to_quantity(2), 30)

    def test_identity(self):
        self.assertTrue(Transformation.identity(self.m).is_identity)
        self.assertFalse(self.mm.normalize().is_identity)
        self.assertEqual(Transformation.null().apply_to_quantity(4.5), 4.5)


class TestUnitAlgebra(unittest.TestCase):
    def setUp(self):
        self.registry = get_registry()

    def test_base_unit_normalization(self):
        m = self.registry.resolve("m")
        self.assertEqual(Transformation(m, m, [lambda x: x]), m.normalize())

    def test_unit_normalization_and_denormalization(self):
        m = self.registry.resolve("m")
        mm = self.registry.resolve("mm")
        self.assertEqual(Transformation(mm, m, [lambda x: x / 1000.0]), mm.normalize())
        self.assertEqual(Transformation(m, mm, [lambda x: x * 1000.0]), m.denormalize(mm))
        self.assertEqual(Transformation.identity(m), m.denormalize(m))

    def test_unit_conversion(self):
        mm = self.registry.resolve("mm")
        ft = self.registry.resolve("ft")
        t = Transformation(mm, ft, [lambda x: x / 1000.0 / 0.3048])
        self.assertEqual(t, mm.convert_to(ft))
        self.assertEqual(t, self.registry.convert("mm", "ft"))

    def test_conversion_to_base_unit(self):
        km = self.registry.resolve("km")
        m = self.registry.resolve("m")
        self.assertEqual(Transformation(km, m, [lambda x: x * 1000]), km.convert_to(m))
        self.assertEqual(Transformation(m, km, [lambda x: x / 1000]), m.convert_to(km))

    def test_temperature_conversion(self):
        t = self.registry.convert("cel", "fah")
        self.assertAlmostEqual(t(100), 212)
        self.assertAlmostEqual(t(-40), -40)

    def test_incompatible_conversion(self):
        with self.assertRaises(IncompatibleUnitsError):
            self.registry.convert("mm", "kg")
        with self.assertRaises(IncompatibleUnitsError):
            self.registry.resolve("m").denormalize(self.registry.resolve("g"))

    def test_every_unit_round_trips_through_its_base(self):
        for unit in self.registry.units():
            with self.subTest(unit=unit.symbol):
                self.assertEqual(unit.normalize().to_unit, self.registry.base_unit_for(unit.quality))
                self.assertEqual(
                    unit.normalize() + unit.denormalize(), Transformation.identity(unit)
                )


if __name__ == "__main__":
    unittest.main()
