"""
Spiral Galaxy
=============

A procedurally generated point-cloud galaxy that regrows from its
parameters on every change, with a damped orbital camera.

Usage:
    python main.py                 # Play the intro animation
    python main.py --seed 42       # Reproducible particle layout
    python main.py --no-intro      # Start from the fully grown galaxy

Controls:
    - Mouse drag / W/A/S/D: Rotate camera
    - Mouse wheel / Q/E: Zoom in/out
    - G: Show/hide parameter panel (Up/Down select, Left/Right change)
    - R: Restart intro
    - H: Toggle help text
    - ESC: Quit
"""

import argparse

from config import galaxy as config
from core.application import Application


def main():
    parser = argparse.ArgumentParser(
        description="Procedural spiral galaxy viewer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--seed", type=int, default=config.GALAXY["seed"],
                        help="Random seed for particle placement (default: random)")
    parser.add_argument("--no-intro", action="store_true",
                        help="Skip the intro animation")
    args = parser.parse_args()

    app = Application(seed=args.seed, intro=not args.no_intro)
    app.run()


if __name__ == "__main__":
    main()
