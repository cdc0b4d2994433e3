import sys
import argparse
import logging
from typing import Optional
from pydantic import ValidationError
from wmapsym.config import ConverterConfig
from wmapsym.symmetrizer import Symmetrizer
from wmapsym.wmap import WesnothMap, output_path


def write_symmetric(wmap: WesnothMap, path: str, rotation_deg: int, cfg: ConverterConfig) -> str:
    result = Symmetrizer(wmap, rotation_deg).symmetrized_map()
    out = output_path(path, cfg.output_prefix)
    result.save(out, encoding=cfg.encoding)
    return str(out)


def convert(path: str, rotation_deg: int, cfg: ConverterConfig) -> str:
    wmap = WesnothMap.load(path, encoding=cfg.encoding)
    return write_symmetric(wmap, path, rotation_deg, cfg)


def parse_rotation(s: str, default: int) -> int:
    s = s.strip()
    if not s:
        return default
    try:
        return int(s)
    except ValueError:
        raise ValueError(f"rotation must be an integer, got {s!r}")


def interactive(cfg: ConverterConfig) -> int:
    print("Wesnoth map symmetrizer")
    print("Commands: help, quit")
    while True:
        try:
            s = input("\nEnter Wesnoth map file path: ").strip()
        except EOFError:
            print()
            return 0
        if not s:
            continue
        if s.lower() in ("q", "quit", "exit"):
            print("Bye.")
            return 0
        if s.lower() in ("h", "help", "?"):
            print("Give a map file, then the rotation of its top-left quadrant")
            print("in degrees (multiple of 90, blank for %d)." % cfg.default_rotation)
            print(f"The result is written next to it with the prefix {cfg.output_prefix!r}.")
            continue
        try:
            wmap = WesnothMap.load(s, encoding=cfg.encoding)
        except (ValueError, OSError) as e:
            print(f"ERROR: {e}")
            continue
        try:
            raw = input("rotation: ")
        except EOFError:
            print()
            return 0
        try:
            out = write_symmetric(wmap, s, parse_rotation(raw, cfg.default_rotation), cfg)
        except (ValueError, OSError) as e:
            print(f"ERROR: {e}")
            continue
        print("Successfully completed")
        print(f"Output file path: {out}")


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("map", nargs="?", default=None)
    parser.add_argument("--rotation", type=int, default=None)
    parser.add_argument("--prefix", default=None)
    parser.add_argument("--encoding", default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides = {}
    if args.prefix is not None:
        overrides["output_prefix"] = args.prefix
    if args.encoding is not None:
        overrides["encoding"] = args.encoding
    if args.rotation is not None:
        overrides["default_rotation"] = args.rotation
    try:
        cfg = ConverterConfig(**overrides)
    except ValidationError as e:
        print(f"ERROR: {e}")
        return 2

    if args.map is None:
        return interactive(cfg)
    try:
        out = convert(args.map, cfg.default_rotation, cfg)
    except (ValueError, OSError) as e:
        print(f"ERROR: {e}")
        return 1
    print(f"Output file path: {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
