"""Tests for energy functions."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import math
import numpy as np
import torch
import pytest
from seamgraph.carving import build_image
from seamgraph.energy import (pixel_energy, brightness_map, sobel_energy,
                              energy_to_gray, MAX_ENERGY)
from seamgraph.graph import link_horizontal, link_vertical
from seamgraph.node import BORDER

from conftest import make_random_pixels, reference_energy


def single_center_pixel(rgb):
    pixels = np.zeros((3, 3, 3), dtype=np.uint8)
    pixels[1, 1] = rgb
    return pixels


class TestPixelEnergy:
    def test_white_center_on_black(self):
        """Only the neighbors of the bright center see a gradient."""
        image = build_image(single_center_pixel((255, 255, 255)))
        energy = image.energy_map()

        assert energy[1, 1].item() == 0.0
        for y, x in [(0, 1), (1, 0), (1, 2), (2, 1)]:
            assert energy[y, x].item() == pytest.approx(2.0)
        for y, x in [(0, 0), (0, 2), (2, 0), (2, 2)]:
            assert energy[y, x].item() == pytest.approx(math.sqrt(2))

    def test_colored_center_matches_formula(self):
        """Top-middle pixel: horiz = 0, vert = -2 * b(center)."""
        image = build_image(single_center_pixel((30, 60, 90)))
        b = 180 / 765
        node = image.grid.node(0, 1)
        assert pixel_energy(image.store, node) == pytest.approx(2 * b)

        corner = image.grid.node(0, 0)
        assert pixel_energy(image.store, corner) == pytest.approx(math.sqrt(2) * b)

    def test_uniform_image_has_energy_only_on_border(self):
        pixels = np.full((5, 5, 3), 200, dtype=np.uint8)
        energy = build_image(pixels).energy_map()
        assert energy[1:-1, 1:-1].abs().max().item() < 1e-12
        assert energy[0, 2].item() > 0

    def test_matches_reference_on_random_image(self):
        pixels = make_random_pixels(7, 9, seed=3)
        energy = build_image(pixels).energy_map()
        expected = torch.tensor(reference_energy(pixels), dtype=torch.float64)
        assert torch.equal(energy, expected)

    def test_matches_sobel(self):
        pixels = make_random_pixels(8, 6, seed=11)
        energy = build_image(pixels).energy_map()
        sobel = sobel_energy(brightness_map(torch.from_numpy(pixels)))
        assert torch.allclose(energy, sobel, atol=1e-9)

    def test_energy_is_cached(self):
        image = build_image(make_random_pixels(3, 3))
        node = image.grid.node(1, 1)
        assert not image.store.is_energy_valid(node)
        value = pixel_energy(image.store, node)
        assert image.store.is_energy_valid(node)
        assert image.store.cached_energy(node) == value

    def test_energy_in_range(self):
        energy = build_image(make_random_pixels(10, 10, seed=5)).energy_map()
        assert (energy >= 0).all()
        assert (energy <= MAX_ENERGY + 1e-12).all()


class TestInvalidation:
    def _warm(self, image):
        for node in image.grid:
            pixel_energy(image.store, node)

    def _stale(self, image):
        return {(y, x) for y in range(image.height) for x in range(image.width)
                if not image.store.is_energy_valid(image.grid.node(y, x))}

    def test_link_horizontal_invalidates_six_nodes(self):
        image = build_image(make_random_pixels(3, 3))
        self._warm(image)
        grid = image.grid
        link_horizontal(image.store, grid.node(1, 0), grid.node(1, 1))
        assert self._stale(image) == {(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)}

    def test_link_vertical_invalidates_six_nodes(self):
        image = build_image(make_random_pixels(3, 3))
        self._warm(image)
        grid = image.grid
        link_vertical(image.store, grid.node(2, 1), grid.node(1, 1))
        assert self._stale(image) == {(2, 0), (2, 1), (2, 2), (1, 0), (1, 1), (1, 2)}

    def test_border_side_only_touches_real_node(self):
        image = build_image(make_random_pixels(3, 3))
        self._warm(image)
        grid = image.grid
        link_horizontal(image.store, grid.node(0, 2), BORDER)
        assert self._stale(image) == {(0, 2), (1, 2)}


class TestTorchEnergy:
    def test_brightness_map(self):
        image = torch.tensor([[[255, 255, 255], [0, 0, 0]]], dtype=torch.uint8)
        bright = brightness_map(image)
        assert bright.shape == (1, 2)
        assert bright[0, 0].item() == pytest.approx(1.0)
        assert bright[0, 1].item() == 0.0

    def test_brightness_map_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            brightness_map(torch.zeros(3, 4, 4))

    def test_sobel_uniform_interior_is_zero(self):
        energy = sobel_energy(torch.full((10, 10), 0.5, dtype=torch.float64))
        assert energy[1:-1, 1:-1].max().item() < 1e-12

    def test_vertical_edge_has_energy(self):
        bright = torch.zeros(10, 10, dtype=torch.float64)
        bright[:, 5:] = 1.0
        energy = sobel_energy(bright)
        assert energy[3:7, 4:6].min().item() > 1.0
        assert energy[3:7, 1:3].max().item() < 1e-12


class TestEnergyToGray:
    def test_bounds(self):
        assert energy_to_gray(0.0) == 0
        assert energy_to_gray(MAX_ENERGY) == 255
        assert energy_to_gray(2 * MAX_ENERGY) == 255

    def test_monotonic(self):
        levels = [energy_to_gray(e) for e in (0.5, 1.0, 2.0, 4.0)]
        assert levels == sorted(levels)
