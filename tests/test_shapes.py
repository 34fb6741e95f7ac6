import copy
import unittest

from tetris_shapes import KICKS, PIECES, SHAPES, TRANSITIONS, ShapeTableError, top_offset, validate_tables


class ShapeTableTests(unittest.TestCase):
    def test_every_type_has_four_rotations_of_four_cells(self):
        for t in PIECES:
            self.assertEqual(len(SHAPES[t]), 4)
            for m in SHAPES[t]:
                self.assertEqual(sum(map(sum, m)), 4)

    def test_every_transition_includes_in_place_rotation_first(self):
        for t in PIECES:
            for tr in TRANSITIONS:
                self.assertEqual(KICKS[t][tr][0], (0, 0))

    def test_o_has_single_candidate(self):
        for tr in TRANSITIONS:
            self.assertEqual(KICKS["O"][tr], [(0, 0)])

    def test_t_table_differs_from_jlsz(self):
        self.assertNotEqual(KICKS["T"], KICKS["J"])
        self.assertNotEqual(KICKS["I"], KICKS["J"])

    def test_missing_transition_is_rejected(self):
        kicks = copy.deepcopy(KICKS)
        del kicks["S"][(2, 3)]
        with self.assertRaises(ShapeTableError):
            validate_tables(SHAPES, kicks)

    def test_missing_zero_offset_is_rejected(self):
        kicks = copy.deepcopy(KICKS)
        kicks["L"][(0, 1)] = [(1, 0)]
        with self.assertRaises(ShapeTableError):
            validate_tables(SHAPES, kicks)

    def test_missing_rotation_is_rejected(self):
        shapes = copy.deepcopy(SHAPES)
        shapes["Z"] = shapes["Z"][:3]
        with self.assertRaises(ShapeTableError):
            validate_tables(shapes, KICKS)

    def test_ragged_matrix_is_rejected(self):
        shapes = copy.deepcopy(SHAPES)
        shapes["T"][0] = [[0, 1, 0], [1, 1, 1, 0], [0, 0, 0]]
        with self.assertRaises(ShapeTableError):
            validate_tables(shapes, KICKS)

    def test_error_is_a_value_error(self):
        self.assertTrue(issubclass(ShapeTableError, ValueError))

    def test_top_offset(self):
        self.assertEqual(top_offset(SHAPES["I"][0]), 1)
        self.assertEqual(top_offset(SHAPES["I"][2]), 2)
        self.assertEqual(top_offset(SHAPES["T"][0]), 0)


if __name__ == "__main__":
    unittest.main()
