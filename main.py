# main.py
from __future__ import annotations

import argparse, json
from dataclasses import dataclass, fields, replace
from pathlib import Path
import sys

from alphabet_and_plugboard import random_pairs
from daily_key import machine_from_key, read_daily_key, write_daily_key
from debug import COMPONENTS, Debug
from errors import EnigmaError
from rotor_and_reflector import build_rng

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────

DEFAULT_ROTOR_FILE = "./daily_key.enigma"
DEFAULT_PLUGBOARD_FILE = "./plugboard.json"

debug = Debug()


@dataclass(slots=True)
class Config:
    """Where the key material lives and how the rotors start."""

    rotor_file: str = DEFAULT_ROTOR_FILE
    plugboard_file: str = DEFAULT_PLUGBOARD_FILE
    positions: str = "aaa"          # window symbols, fast rotor first
    seed: int | None = None         # None → CSPRNG for key generation


def load_config(path: str | Path) -> Config:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config file must hold a JSON object")
    known = {f.name for f in fields(Config)}
    unknown = data.keys() - known
    if unknown:
        raise ValueError(f"Unknown keys in config: {', '.join(sorted(unknown))}")

    for key, value in data.items():
        if key == "seed":
            ok = value is None or (isinstance(value, int) and not isinstance(value, bool))
            expected = "an integer or null"
        else:
            ok = isinstance(value, str)
            expected = "a string"
        if not ok:
            raise ValueError(f"Config key '{key}' must be {expected}, got {value!r}")
    return Config(**data)


# ────────────────────────────────────────────────────────────────────────
#  1. Plugboard file helpers
# ────────────────────────────────────────────────────────────────────────


def load_plugboard(path: str | Path) -> list[str]:
    """Return the plug pairs stored in *path*; a missing file means no plugs."""
    path = Path(path)
    if not path.exists():
        return []
    data = json.loads(path.read_text(encoding="utf-8"))
    pairs = data.get("pairs", []) if isinstance(data, dict) else None
    if not isinstance(pairs, list) or not all(isinstance(p, str) for p in pairs):
        raise ValueError(f"{path}: 'pairs' must be a list of two-symbol strings")
    return pairs


def generate_plugboard(path: str | Path, rng, count: int = 0) -> list[str]:
    pairs = random_pairs(rng, count)
    payload = {
        "_comment": "Each pair swaps two symbols both ways, e.g. \"ab\", \"CD\", \"X \".",
        "pairs": pairs,
    }
    Path(path).write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return pairs


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="enigma",
        description="Three-rotor cipher machine with plugboard over a 53-symbol alphabet.",
    )
    p.add_argument("message", nargs="?", help="Message to encrypt/decrypt.")
    p.add_argument("-g", "--generate", action="store_true", help="Generate a new daily key file.")
    p.add_argument("-p", "--generate-plugboard", action="store_true", help="Generate a plugboard file.")
    p.add_argument("-r", "--rotor-file", metavar="FILE", help=f"Daily key file. Default: {DEFAULT_ROTOR_FILE}")
    p.add_argument("-b", "--plugboard-file", metavar="FILE", help=f"Plugboard file. Default: {DEFAULT_PLUGBOARD_FILE}")
    p.add_argument("-s", "--start-positions", metavar="POSITIONS", help="Initial rotor positions (3 symbols). Default: aaa")
    p.add_argument("--seed", type=int, help="Deterministic seed for generation (omit for cryptographically strong randomness)")
    p.add_argument("--pairs", type=int, default=0, metavar="N", help="Random plug pairs to put in a generated plugboard file. Default: 0")
    p.add_argument("--config", metavar="FILE", help="Load settings from JSON; flags still take precedence.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log rotor stepping and each enciphered symbol.")
    p.add_argument("--debug", action="append", default=[], choices=COMPONENTS, metavar="COMPONENT", help=f"Enable debug logging for one of: {', '.join(COMPONENTS)}")

    args = p.parse_args(argv)
    if args.message is None and not (args.generate or args.generate_plugboard):
        p.error("a message is required unless --generate or --generate-plugboard is given")
    return args


def resolve_config(args: argparse.Namespace) -> Config:
    cfg = load_config(args.config) if args.config else Config()
    overrides = {
        "rotor_file": args.rotor_file,
        "plugboard_file": args.plugboard_file,
        "positions": args.start_positions,
        "seed": args.seed,
    }
    return replace(cfg, **{k: v for k, v in overrides.items() if v is not None})


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    if args.verbose:
        debug.enable("stepping", "encipher")
    if args.debug:
        debug.enable(*args.debug)

    try:
        cfg = resolve_config(args)
    except (OSError, ValueError) as e:
        sys.exit(f"Error loading configuration: {e}")

    generated_something = False

    if args.generate:
        try:
            write_daily_key(cfg.rotor_file, build_rng(cfg.seed))
        except OSError as e:
            sys.exit(f"Error generating rotors: {e}")
        print(f"Rotor configuration saved to: {cfg.rotor_file}")
        generated_something = True

    if args.generate_plugboard:
        # the plugboard stream is offset so a shared seed does not mirror the rotor shuffle
        seed = None if cfg.seed is None else cfg.seed + 100_000
        try:
            generate_plugboard(cfg.plugboard_file, build_rng(seed), args.pairs)
        except OSError as e:
            sys.exit(f"Error generating plugboard: {e}")
        print(f"Plugboard configuration generated at: {cfg.plugboard_file}")
        generated_something = True

    if generated_something:
        return

    #  Build the machine from the key material on disk
    if not Path(cfg.rotor_file).exists():
        sys.exit(f"Error initializing Enigma machine: rotor file '{cfg.rotor_file}' not found")
    try:
        key = read_daily_key(cfg.rotor_file)
        pairs = load_plugboard(cfg.plugboard_file)
        machine = machine_from_key(key, pairs, cfg.positions)
    except (OSError, ValueError) as e:
        sys.exit(f"Error initializing Enigma machine: {e}")

    try:
        result = machine.encode_message(args.message)
    except EnigmaError as e:
        sys.exit(f"Error encoding message: {e}")
    print(result)


if __name__ == "__main__":
    main()
