# -*- coding: utf-8 -*-
"""
Particle Detection Example - Detect spots in a fluorescence image.

Loads a 2D image from a ``.npy`` file (or synthesizes a noisy image of
Gaussian spots when no file is given), runs ``ParticleDetectorUWT2D``
and displays the input, the correlation image of the finest scale
window, the binary mask, and the contour overlay.

Demonstrates wavedet integration:
  - ``wavedet.image_processing.detection.ParticleDetectorUWT2D`` for
    multiscale particle detection
  - ``wavedet.image_processing.morphology.nuclei_mask`` for restricting
    detection to nuclei
  - ``DetectionSet.to_geojson`` for exporting the detections

Usage:
  python detect_particles.py
  python detect_particles.py image.npy --threshold 2.0
  python detect_particles.py image.npy --nuclei dapi.npy --j-min 1 --j-max 3
  python detect_particles.py --geojson particles.json
  python detect_particles.py --help

Dependencies
------------
matplotlib

Author
------
wavedet developers

License
-------
MIT License
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import argparse
import json
import logging
from pathlib import Path
from typing import Optional

# Third-party
import numpy as np

# wavedet
from wavedet.exceptions import DependencyError
from wavedet.image_processing.detection import ParticleDetectorUWT2D
from wavedet.image_processing.morphology import nuclei_mask


# ── CLI ──────────────────────────────────────────────────────────────


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Detect particles in a 2D fluorescence image with the "
                    "multiscale wavelet-correlation detector.",
    )
    parser.add_argument(
        "filepath",
        type=Path,
        nargs="?",
        default=None,
        help="Path to a 2D .npy image. A synthetic image is used if omitted.",
    )
    parser.add_argument(
        "--nuclei",
        type=Path,
        default=None,
        help="Optional 2D .npy nuclei channel; only particles inside "
             "nuclei are kept.",
    )
    parser.add_argument("--j-min", type=int, default=2,
                        help="Finest wavelet scale (default: 2).")
    parser.add_argument("--j-max", type=int, default=4,
                        help="Coarsest wavelet scale (default: 4).")
    parser.add_argument("--interval", type=int, default=2,
                        help="Scales per correlation image (default: 2).")
    parser.add_argument("--threshold", type=float, default=1.5,
                        help="Correlation threshold (default: 1.5).")
    parser.add_argument("--min-size", type=int, default=1,
                        help="Minimum particle area in pixels (default: 1).")
    parser.add_argument("--seed", type=int, default=0,
                        help="Seed of the synthetic image (default: 0).")
    parser.add_argument("--geojson", type=Path, default=None,
                        help="Write the detections to this GeoJSON file.")
    parser.add_argument("--no-show", action="store_true",
                        help="Do not open the matplotlib window.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging.")
    return parser.parse_args()


# ── Synthetic data ───────────────────────────────────────────────────


def synthetic_spots(shape=(256, 256), n_spots: int = 40, sigma: float = 1.5,
                    amplitude: float = 60.0, background: float = 10.0,
                    seed: int = 0) -> np.ndarray:
    """Poisson-noisy image of Gaussian spots on a flat background."""
    rng = np.random.default_rng(seed)
    rows, cols = shape
    yy, xx = np.mgrid[0:rows, 0:cols]
    intensity = np.full(shape, background, dtype=np.float64)
    margin = int(4 * sigma)
    for _ in range(n_spots):
        cy = rng.uniform(margin, rows - margin)
        cx = rng.uniform(margin, cols - margin)
        intensity += amplitude * np.exp(
            -((yy - cy) ** 2 + (xx - cx) ** 2) / (2 * sigma ** 2))
    return rng.poisson(intensity).astype(np.float64)


# ── Plotting ─────────────────────────────────────────────────────────


def load_pyplot():
    """Import ``matplotlib.pyplot`` for the display.

    Raises
    ------
    DependencyError
        If matplotlib is not installed.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError as exc:
        raise DependencyError(
            "Displaying results requires matplotlib: "
            "pip install wavedet[example]"
        ) from exc
    return plt


# ── Main ─────────────────────────────────────────────────────────────


def detect_particles_example(
    filepath: Optional[Path] = None,
    nuclei: Optional[Path] = None,
    j_min: int = 2,
    j_max: int = 4,
    interval: int = 2,
    threshold: float = 1.5,
    min_size: int = 1,
    seed: int = 0,
    geojson: Optional[Path] = None,
    show: bool = True,
) -> None:
    """Load or synthesize an image, detect particles, and display.

    Parameters
    ----------
    filepath : Path, optional
        2D ``.npy`` image. Synthetic spots are used if None.
    nuclei : Path, optional
        2D ``.npy`` nuclei channel; detection is restricted to nuclei.
    j_min, j_max, interval : int
        Scale configuration of the detector.
    threshold : float
        Correlation threshold.
    min_size : int
        Minimum particle area.
    seed : int
        Seed of the synthetic image.
    geojson : Path, optional
        Output file for the detections.
    show : bool
        Open the matplotlib window.
    """
    if filepath is None:
        print(f"Synthesizing spot image (seed={seed})")
        image = synthetic_spots(seed=seed)
    else:
        print(f"Opening: {filepath}")
        image = np.load(filepath)
    print(f"  Image shape: {image.shape}, dtype: {image.dtype}")

    exclude = None
    if nuclei is not None:
        exclude = nuclei_mask(np.load(nuclei))
        print(f"  Restricting detection to {int(np.count_nonzero(exclude == 0))} "
              f"nuclei pixels")

    detector = ParticleDetectorUWT2D(
        j_min=j_min, j_max=j_max, scale_interval_size=interval,
        correlation_threshold=threshold, min_region_size=min_size,
        additional_results=True,
    )
    detector.add_status_listener(lambda event: print(f"  {event.message}"))

    result = detector.run(image, exclude_mask=exclude)
    print(f"  Particles: {result.count}")
    print(f"  Selected regions per interval: {list(result.level_counts)}")

    if geojson is not None:
        detections = detector.to_detections(image, result)
        geojson.write_text(json.dumps(detections.to_geojson(), indent=2))
        print(f"  Wrote {len(detections)} detections to {geojson}")

    if not show:
        return

    plt = load_pyplot()

    # ── Display (1 row x 4 cols) ──────────────────────────────────────
    fig, axes = plt.subplots(1, 4, figsize=(20, 5.5))
    title = filepath.name if filepath is not None else "synthetic"
    fig.suptitle(f"Wavelet-Correlation Particle Detection\n{title}",
                 fontsize=12)

    axes[0].imshow(image, cmap="gray", interpolation="nearest")
    axes[0].set_title("Input")

    corr = result.correlation_images[0]
    im_corr = axes[1].imshow(corr, cmap="magma", interpolation="nearest",
                             vmin=0, vmax=np.percentile(corr, 99.5))
    axes[1].set_title(f"Correlation (scales {j_min}..{j_min + interval - 1})")
    plt.colorbar(im_corr, ax=axes[1], fraction=0.046, pad=0.04)

    axes[2].imshow(result.mask, cmap="gray", interpolation="nearest")
    axes[2].set_title(f"Mask ({result.count} particles)")

    axes[3].imshow(result.overlay, interpolation="nearest")
    axes[3].set_title("Contours")

    for ax in axes:
        ax.set_xlabel("Column")
        ax.set_ylabel("Row")

    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    detect_particles_example(
        args.filepath,
        nuclei=args.nuclei,
        j_min=args.j_min,
        j_max=args.j_max,
        interval=args.interval,
        threshold=args.threshold,
        min_size=args.min_size,
        seed=args.seed,
        geojson=args.geojson,
        show=not args.no_show,
    )
