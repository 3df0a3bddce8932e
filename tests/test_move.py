"""
Tests for move resolution and end-of-game detection.
"""

from unittest import TestCase, main

import numpy as np

from tentwentyfour.core.gameboard import Grid
from tentwentyfour.core.gamemove import has_legal_move, has_won, legal_directions, legal_directions_mask
from tentwentyfour.core.resolver import build_traversals, find_farthest_position, resolve
from tentwentyfour.core.tiles import Direction, InvalidDirectionError, Merged, Slid, TileIdGenerator

generator = np.random.default_rng(42)


def make_grid(rows) -> Grid:
    return Grid.from_values(rows, TileIdGenerator())


def single_row(row, size: int = 4) -> Grid:
    """Grid whose first row is ``row`` and the rest empty."""
    return make_grid([list(row)] + [[0] * size for _ in range(size - 1)])


def generate_random_board(size: int = 4) -> Grid:
    """Generate a random grid."""
    board = np.zeros((size, size), dtype=np.int64)
    num_tiles = generator.integers(1, size * size + 1)
    tile_values = generator.choice([2, 4, 8, 16, 32, 64, 128], size=num_tiles)
    indices = generator.choice(size * size, size=num_tiles, replace=False)
    board.flat[indices] = tile_values
    return make_grid(board.tolist())


class TestTraversal(TestCase):
    """Processing order and sliding distance."""

    def test_build_traversals(self):
        """Orders are reversed along a positive vector component."""
        self.assertEqual(build_traversals(4, Direction.LEFT), ([0, 1, 2, 3], [0, 1, 2, 3]))
        self.assertEqual(build_traversals(4, Direction.UP), ([0, 1, 2, 3], [0, 1, 2, 3]))
        self.assertEqual(build_traversals(4, Direction.RIGHT), ([0, 1, 2, 3], [3, 2, 1, 0]))
        self.assertEqual(build_traversals(4, Direction.DOWN), ([3, 2, 1, 0], [0, 1, 2, 3]))

    def test_find_farthest_position(self):
        grid = single_row([0, 4, 0, 2])

        # ##>: Blocked by a tile.
        self.assertEqual(find_farthest_position(grid, (0, 3), Direction.LEFT), ((0, 2), (0, 1)))

        # ##>: Blocked by the edge.
        self.assertEqual(find_farthest_position(grid, (0, 1), Direction.LEFT), ((0, 0), (0, -1)))
        self.assertEqual(find_farthest_position(grid, (0, 1), Direction.DOWN), ((3, 1), (4, 1)))

        # ##>: Already against the edge.
        self.assertEqual(find_farthest_position(grid, (0, 3), Direction.RIGHT), ((0, 3), (0, 4)))


class TestResolve(TestCase):
    """Sliding and merging of tiles."""

    def assertRow(self, result, expected):
        np.testing.assert_array_equal(result.grid.values()[0], np.array(expected))

    def test_merge_pair_left(self):
        """Two equal tiles moved left merge into the first cell."""
        result = resolve(single_row([2, 2, 0, 0]), Direction.LEFT)

        self.assertRow(result, [4, 0, 0, 0])
        self.assertEqual(result.score, 4)
        self.assertTrue(result.moved)
        self.assertEqual(len(result.effects), 1)
        self.assertIsInstance(result.effects[0], Merged)
        self.assertEqual((result.effects[0].source, result.effects[0].target), ((0, 1), (0, 0)))

    def test_gap_then_pair_right(self):
        """The far 4 blocks the 2s, which merge next to it without merging again."""
        result = resolve(single_row([2, 0, 2, 4]), Direction.RIGHT)

        self.assertRow(result, [0, 0, 4, 4])
        self.assertEqual(result.score, 4)
        self.assertEqual(len(result.effects), 1)
        self.assertEqual((result.effects[0].source, result.effects[0].target), ((0, 0), (0, 2)))

    def test_three_equal_right(self):
        """With three equal tiles, the two farthest merge and the third slides behind."""
        result = resolve(single_row([2, 2, 2, 0]), Direction.RIGHT)

        self.assertRow(result, [0, 0, 2, 4])
        self.assertEqual(result.score, 4)
        self.assertEqual([type(effect) for effect in result.effects], [Slid, Merged, Slid])

    def test_four_equal_left(self):
        result = resolve(single_row([2, 2, 2, 2]), Direction.LEFT)
        self.assertRow(result, [4, 4, 0, 0])
        self.assertEqual(result.score, 8)

    def test_no_chain_merge(self):
        """A tile created by a merge does not merge again in the same move."""
        self.assertRow(resolve(single_row([4, 2, 2, 0]), Direction.LEFT), [4, 4, 0, 0])
        self.assertRow(resolve(single_row([2, 2, 4, 0]), Direction.LEFT), [4, 4, 0, 0])
        self.assertRow(resolve(single_row([2, 2, 4, 8]), Direction.LEFT), [4, 4, 8, 0])

    def test_vertical_moves(self):
        grid = make_grid([[0, 2, 0, 0], [2, 0, 0, 0], [0, 2, 0, 0], [2, 2, 0, 0]])

        up = resolve(grid, Direction.UP)
        np.testing.assert_array_equal(up.grid.values()[:, 0], [4, 0, 0, 0])
        np.testing.assert_array_equal(up.grid.values()[:, 1], [4, 2, 0, 0])

        down = resolve(grid, Direction.DOWN)
        np.testing.assert_array_equal(down.grid.values()[:, 0], [0, 0, 0, 4])
        np.testing.assert_array_equal(down.grid.values()[:, 1], [0, 0, 2, 4])
        self.assertEqual(down.score, 8)

    def test_no_move(self):
        """A move that changes nothing returns the same grid and no effects."""
        grid = single_row([2, 4, 0, 0])
        result = resolve(grid, Direction.LEFT)

        self.assertFalse(result.moved)
        self.assertEqual(result.effects, [])
        self.assertEqual(result.score, 0)
        self.assertEqual(result.grid, grid)

    def test_input_is_untouched(self):
        grid = make_grid([[2, 2, 4, 4], [0, 2, 2, 4], [2, 0, 0, 2], [2, 2, 2, 2]])
        snapshot = grid.copy()
        resolve(grid, Direction.LEFT)
        self.assertEqual(grid, snapshot)

    def test_board_slide_left(self):
        grid = make_grid([[2, 2, 4, 4], [0, 2, 2, 4], [2, 0, 0, 2], [2, 2, 2, 2]])
        result = resolve(grid, Direction.LEFT)

        expected = np.array([[4, 8, 0, 0], [4, 4, 0, 0], [4, 0, 0, 0], [4, 4, 0, 0]])
        np.testing.assert_array_equal(result.grid.values(), expected)
        self.assertEqual(result.score, 28)

    def test_identity(self):
        """Sliding keeps a tile's id, merging creates a new one from both sources."""
        grid = single_row([0, 8, 2, 2])
        ids = {cell: tile.id for cell, tile in grid.tiles()}
        result = resolve(grid, Direction.LEFT)

        self.assertEqual(result.grid.at((0, 0)).id, ids[(0, 1)])
        merged = result.grid.at((0, 1))
        self.assertEqual(merged.value, 4)
        self.assertNotIn(merged.id, ids.values())
        self.assertEqual({tile.id for tile in merged.merged_from}, {ids[(0, 2)], ids[(0, 3)]})

    def test_merge_history_is_cleared(self):
        """Tiles merged during one move can merge during the next."""
        first = resolve(single_row([2, 2, 4, 0]), Direction.LEFT)
        second = resolve(first.grid, Direction.LEFT)

        self.assertRow(second, [8, 0, 0, 0])
        self.assertFalse(second.grid.at((0, 0)).merged_from[0].is_merged)

    def test_reached_target(self):
        """A merge creating the target value is signalled."""
        result = resolve(single_row([512, 512, 0, 0]), Direction.LEFT)
        self.assertTrue(result.reached_target)
        self.assertEqual(result.grid.at((0, 0)).value, 1024)

        self.assertTrue(resolve(single_row([4, 4, 0, 0]), Direction.RIGHT, target=8).reached_target)
        self.assertFalse(resolve(single_row([4, 4, 0, 0]), Direction.RIGHT).reached_target)

    def test_custom_id_generator(self):
        result = resolve(single_row([2, 2, 0, 0]), Direction.LEFT, next_id=TileIdGenerator(start=500))
        self.assertEqual(result.grid.at((0, 0)).id, 500)

    def test_invalid_direction(self):
        with self.assertRaises(InvalidDirectionError):
            resolve(single_row([2, 2, 0, 0]), 7)


class TestResolveProperties(TestCase):
    """Invariants checked over random grids."""

    def setUp(self):
        self.grids = [generate_random_board(size) for size in (2, 3, 4, 5) for _ in range(25)]

    def test_each_tile_merges_at_most_once(self):
        for grid in self.grids:
            before = {tile.id for _, tile in grid.tiles()}
            for direction in Direction:
                result = resolve(grid, direction)
                merges = [effect for effect in result.effects if isinstance(effect, Merged)]
                sources = [tile.id for effect in merges for tile in effect.tile.merged_from]
                self.assertEqual(len(sources), len(set(sources)))
                self.assertTrue(set(sources) <= before)

    def test_conservation_and_score(self):
        """Each merge removes one tile and scores the value it creates."""
        for grid in self.grids:
            count = len(list(grid.tiles()))
            for direction in Direction:
                result = resolve(grid, direction)
                merges = [effect for effect in result.effects if isinstance(effect, Merged)]

                self.assertEqual(len(list(result.grid.tiles())), count - len(merges))
                self.assertEqual(result.score, sum(effect.tile.value for effect in merges))
                self.assertEqual(int(result.grid.values().sum()), int(grid.values().sum()))

    def test_mask_matches_resolution(self):
        """A direction is legal exactly when resolving it moves a tile."""
        for grid in self.grids:
            mask = legal_directions_mask(grid)
            for direction in Direction:
                self.assertEqual(mask[direction], resolve(grid, direction).moved)

    def test_settles(self):
        """Repeating a move without spawning eventually stops moving anything."""
        for grid in self.grids:
            for direction in Direction:
                current = grid
                for _ in range(grid.size * grid.size):
                    result = resolve(current, direction)
                    if not result.moved:
                        break
                    current = result.grid
                self.assertFalse(resolve(current, direction).moved)
                self.assertNotIn(direction, legal_directions(current))


class TestTerminal(TestCase):
    """End-of-game detection."""

    def test_checkerboard_is_lost(self):
        grid = make_grid([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]])
        self.assertFalse(has_legal_move(grid))
        self.assertEqual(legal_directions(grid), [])

    def test_full_with_equal_pair(self):
        grid = make_grid([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 8, 8]])
        self.assertTrue(has_legal_move(grid))
        self.assertEqual(legal_directions(grid), [Direction.RIGHT, Direction.LEFT])

    def test_empty_cell(self):
        grid = make_grid([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 0]])
        self.assertTrue(has_legal_move(grid))
        self.assertEqual(legal_directions(grid), [Direction.RIGHT, Direction.DOWN])

    def test_legal_directions(self):
        grid = make_grid([[2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.assertEqual(legal_directions(grid), [Direction.UP, Direction.RIGHT, Direction.DOWN])

    def test_has_won(self):
        self.assertTrue(has_won(single_row([1024, 0, 0, 0]), 1024))
        self.assertTrue(has_won(single_row([2048, 0, 0, 0]), 1024))
        self.assertFalse(has_won(single_row([512, 512, 0, 0]), 1024))


if __name__ == '__main__':
    main()
