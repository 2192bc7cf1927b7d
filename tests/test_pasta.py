import unittest

from zkpass import constants
from zkpass.errors import DecodeError
from zkpass.pallas import PALLAS, PALLAS_BASE_MODULUS, PALLAS_SCALAR_MODULUS, PallasGroup, pallas_parameters
from zkpass.protocol import EllipticCurveChaumPedersen, execute_protocol
from zkpass.vesta import VESTA, VestaGroup, vesta_parameters
from zkpass.weierstrass import sqrt_mod


def _non_residue_x(curve) -> int:
    x = 1
    while pow(x * x * x + curve.b, (curve.p - 1) // 2, curve.p) == 1:
        x += 1
    return x


class TestSquareRoot(unittest.TestCase):
    def test_roots_square_back(self) -> None:
        for p in (PALLAS_BASE_MODULUS, PALLAS_SCALAR_MODULUS, 23):
            for value in (4, 9, 16, 1234567):
                square = value * value % p
                with self.subTest(p=p, value=value):
                    root = sqrt_mod(square, p)
                    self.assertIsNotNone(root)
                    self.assertEqual(root * root % p, square)

    def test_non_residue(self) -> None:
        self.assertIsNone(sqrt_mod(5, 23))


class CurveCases:
    """Checks shared by both curves of the cycle."""

    group_class = None
    curve = None

    def setUp(self) -> None:
        self.group = self.group_class()
        self.protocol = EllipticCurveChaumPedersen(self.group)

    def test_generator_on_curve(self) -> None:
        generator = self.curve.generator()
        x, y = generator.affine()
        self.assertEqual((y * y - x ** 3 - 5) % self.curve.p, 0)
        self.assertTrue((generator * (self.curve.n - 1) + generator).is_identity())
        self.assertEqual(generator * (self.curve.n - 1), -generator)

    def test_point_round_trip(self) -> None:
        for _ in range(3):
            point = self.group.random_element()
            encoded = self.group.encode_element(point)
            self.assertEqual(len(encoded), 32)
            self.assertEqual(self.group.decode_element(encoded), point)

    def test_identity_round_trip(self) -> None:
        identity = self.curve.identity()
        self.assertEqual(identity.encode(), bytes(32))
        self.assertTrue(self.group.decode_element(bytes(32)).is_identity())

    def test_group_law(self) -> None:
        generator = self.curve.generator()
        a, b = self.group.random_scalar(), self.group.random_scalar()
        self.assertEqual(generator * a + generator * b, generator * (a + b))
        self.assertEqual(generator + generator, generator.double())
        self.assertTrue((generator * a - generator * a).is_identity())

    def test_decode_rejects_malformed_points(self) -> None:
        with self.assertRaises(DecodeError):
            self.group.decode_element(bytes(31))
        with self.assertRaises(DecodeError):
            self.group.decode_element(b"\xff" * 32)
        off_curve = _non_residue_x(self.curve).to_bytes(32, "little")
        with self.assertRaises(DecodeError):
            self.group.decode_element(off_curve)

    def test_scalar_encoding(self) -> None:
        scalar = self.group.random_scalar()
        self.assertEqual(self.group.decode_scalar(self.group.encode_scalar(scalar)), scalar)
        with self.assertRaises(DecodeError):
            self.group.decode_scalar(self.curve.n.to_bytes(32, "little"))
        with self.assertRaises(DecodeError):
            self.group.decode_scalar(bytes(16))

    def test_wide_reduction(self) -> None:
        digest = b"\xff" * 64
        self.assertEqual(self.group.scalar_from_digest(digest), (2 ** 512 - 1) % self.curve.n)

    def test_completeness_and_soundness(self) -> None:
        params = self.params()
        x = self.group.random_scalar()
        self.assertTrue(execute_protocol(self.protocol, params, x))

        cp, _ = self.protocol.commitment(params, x)
        c = self.protocol.challenge(params)
        self.assertFalse(self.protocol.verify(params, self.group.random_scalar(), c, cp))


class TestPallas(CurveCases, unittest.TestCase):
    group_class = PallasGroup
    curve = PALLAS

    def params(self):
        return pallas_parameters()

    def test_parameter_encodings(self) -> None:
        params = pallas_parameters()
        self.assertEqual(params.g.encode().hex(), constants.PALLAS_G)
        self.assertEqual(params.h.encode().hex(), constants.PALLAS_H)
        self.assertEqual(PALLAS.generator().encode().hex(), constants.PALLAS_REFERENCE)
        self.assertEqual(params.p, PALLAS.generator())


class TestVesta(CurveCases, unittest.TestCase):
    group_class = VestaGroup
    curve = VESTA

    def params(self):
        return vesta_parameters()

    def test_second_generator_is_deterministic(self) -> None:
        params = vesta_parameters()
        self.assertEqual(params.h, VESTA.hash_to_point(constants.VESTA_H_SEED))
        self.assertNotEqual(params.g, params.h)

    def test_cycle_swaps_fields(self) -> None:
        self.assertEqual(VESTA.p, PALLAS.n)
        self.assertEqual(VESTA.n, PALLAS.p)


if __name__ == "__main__":
    unittest.main()
