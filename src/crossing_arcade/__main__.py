"""Play the game: python -m crossing_arcade [--config NAME] [--seed N]."""

import argparse

from .config import CONFIGS, get_config


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Cross the road and reach the water.")
    parser.add_argument("--config", default="default", choices=sorted(CONFIGS),
                        help="Preset configuration")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for a reproducible session")
    parser.add_argument("--assets", default=None,
                        help="Directory containing images/ (placeholders if omitted)")
    parser.add_argument("--debug", action="store_true",
                        help="Draw collision boxes")
    parser.add_argument("--quiet", action="store_true",
                        help="Do not print round announcements")
    args = parser.parse_args(argv)

    config = get_config(args.config)
    if args.assets:
        config.asset_dir = args.assets
    if args.debug:
        config.debug_boxes = True
    if args.quiet:
        config.verbose = False

    # Imported late so --help works without opening a window
    from .engine import ArcadeEngine
    ArcadeEngine(config, seed=args.seed).run()


if __name__ == "__main__":
    main()
