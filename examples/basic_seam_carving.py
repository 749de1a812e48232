"""
Basic seam carving example.

Shows the energy view and the first vertical seam of an image, then carves
it down and plots original vs carved side by side. Without an input path a
synthetic ring image is generated so the example runs standalone.

    python basic_seam_carving.py [image.png] [n_vertical] [n_horizontal]
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import matplotlib.pyplot as plt

from seamgraph import (build_image, carve, highlight_seam, load_image,
                       save_image, tensor_to_image, VERTICAL)


def create_ring_image(height=120, width=160, inner_radius=18, outer_radius=45):
    """Bright textured ring on a dark background, as an (H, W, 3) uint8 array."""
    y = torch.arange(height, dtype=torch.float32)
    x = torch.arange(width, dtype=torch.float32)
    yy, xx = torch.meshgrid(y, x, indexing='ij')
    dist = torch.sqrt((xx - width / 2)**2 + (yy - height / 2)**2)

    image = torch.where((dist >= inner_radius) & (dist <= outer_radius),
                        torch.tensor(0.8), torch.tensor(0.2))

    # Speckle texture so the ring carries energy everywhere
    torch.manual_seed(42)
    speckle = torch.rand(height, width) < 0.03
    image = torch.where(speckle & (image > 0.5), torch.tensor(0.95), image)
    return tensor_to_image(image)


def main():
    if len(sys.argv) > 1:
        print(f"Loading {sys.argv[1]}...")
        pixels = load_image(sys.argv[1])
    else:
        print("Generating ring image...")
        pixels = create_ring_image()
    n_vertical = int(sys.argv[2]) if len(sys.argv) > 2 else 40
    n_horizontal = int(sys.argv[3]) if len(sys.argv) > 3 else 20

    os.makedirs('output', exist_ok=True)

    print("Constructing graph...")
    image = build_image(pixels)
    print(f"Image size: {image.width} x {image.height}")

    energy_view = image.energy_pixels()
    seam = image.preview_seam(VERTICAL)
    with_seam = highlight_seam(pixels, seam)
    save_image(with_seam, 'output/first_seam.png')

    print(f"Carving {n_vertical} vertical and {n_horizontal} horizontal seams...")

    def report(step, direction, coords):
        if step % 20 == 0:
            print(f"  Removed {step} seams, size: {image.width} x {image.height}")

    carve(image, n_vertical, n_horizontal, on_step=report)
    carved = image.read_pixels()
    save_image(carved, 'output/carved.png')

    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    axes[0].imshow(energy_view)
    axes[0].set_title('Energy')
    axes[1].imshow(with_seam)
    axes[1].set_title('First vertical seam')
    axes[2].imshow(carved)
    axes[2].set_title(f'Carved ({image.width} x {image.height})')
    for ax in axes:
        ax.axis('off')
    plt.tight_layout()
    plt.savefig('output/basic_seam_carving.png', dpi=100)
    print("Saved: output/basic_seam_carving.png")

    print("\nDone! Check the output/ directory for results.")


if __name__ == '__main__':
    main()
