#!/usr/bin/env python3
"""fractal_curves.py

Deterministic L-system fractal curves (Dragon, Hilbert, ...) rendered to SVG.

Key features:
- Pass-by-pass grammar expansion, plus a streaming variant for sampling.
- Expansion length computed from substitution counts alone.
- Five-symbol turtle with by-value push/pop snapshots.
- Bounding box tracking and offset/border placement on a non-negative canvas.
- JSON grammar configs on top of the built-in catalog.
- Single-flight, per-(system, iterations) drawing cache.

Run:
  python fractal_curves.py list
  python fractal_curves.py render DragonCurve 10 dragon.svg
  python fractal_curves.py expand HilbertCurve 3 --length-only
  python fractal_curves.py validate example/koch.json
  python fractal_curves.py --help
"""

from __future__ import annotations

import argparse
import enum
import itertools
import json
import logging
import math
import os
import sys
import threading
from collections import Counter
from collections.abc import Generator, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union, cast

LOGGER = logging.getLogger(__name__)

# Turtle step and canvas margin used by the built-in drawings.
STEP_LENGTH = 5.0
BORDER = 5
STROKE = "black"

DEFAULT_ITERATION_LIMIT = 32
DEFAULT_SYMBOL_LIMIT = 2_000_000


# -------------------------
# Errors / Validation
# -------------------------


class ConfigError(ValueError):
    pass


class UnbalancedStack(ConfigError):
    """A ']' was interpreted with no matching '['."""


class InvalidIteration(ValueError):
    pass


class IterationLimitExceeded(InvalidIteration):
    pass


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigError(msg)


def _as_float(x: Any, path: str) -> float:
    _require(isinstance(x, (int, float)), f"{path} must be a number")
    return float(x)


def _as_int(x: Any, path: str) -> int:
    _require(
        isinstance(x, int) and not isinstance(x, bool), f"{path} must be an integer"
    )
    return int(x)


def _as_str(x: Any, path: str) -> str:
    _require(isinstance(x, str), f"{path} must be a string")
    return cast(str, x)


def _as_dict(x: Any, path: str) -> dict[str, Any]:
    _require(isinstance(x, dict), f"{path} must be an object")
    return cast(dict[str, Any], x)


def _check_iterations(iterations: Any) -> int:
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise InvalidIteration(f"iterations must be an integer, got {iterations!r}")
    if iterations < 0:
        raise InvalidIteration(f"iterations must be >= 0, got {iterations}")
    return iterations


def _check_iteration_limit(iterations: int, limit: int) -> None:
    if iterations > limit:
        raise IterationLimitExceeded(f"iterations must be <= {limit}, got {iterations}")


# -------------------------
# Data model
# -------------------------


@dataclass(frozen=True)
class GrammarSpec:
    """A named, deterministic L-system.

    Only symbols present as keys of ``rules`` are rewritten; every other symbol
    is terminal. ``turn_angle`` is in radians.
    """

    name: str
    axiom: str
    rules: Mapping[str, str]
    turn_angle: float
    max_prewarm_iterations: int = 0

    def __post_init__(self) -> None:
        _require(
            isinstance(self.name, str) and len(self.name) > 0,
            "name must be a non-empty string",
        )
        _require(isinstance(self.axiom, str), f"{self.name}: axiom must be a string")
        _require(
            isinstance(self.rules, Mapping), f"{self.name}: rules must be a mapping"
        )
        for k, v in self.rules.items():
            _require(
                isinstance(k, str) and len(k) == 1,
                f"{self.name}: rules keys must be single-character strings",
            )
            _require(
                isinstance(v, str) and len(v) > 0,
                f"{self.name}: rules['{k}'] must be a non-empty string",
            )
        prewarm = _as_int(
            self.max_prewarm_iterations, f"{self.name}: max_prewarm_iterations"
        )
        _require(
            prewarm >= 0,
            f"{self.name}: max_prewarm_iterations must be >= 0",
        )
        object.__setattr__(self, "rules", MappingProxyType(dict(self.rules)))


@dataclass(frozen=True)
class Point:
    x: float
    y: float


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class LineTo:
    point: Point


PathOp = Union[MoveTo, LineTo]


@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def at(cls, p: Point) -> BoundingBox:
        return cls(p.x, p.x, p.y, p.y)

    def include(self, p: Point) -> BoundingBox:
        return BoundingBox(
            min(self.min_x, p.x),
            max(self.max_x, p.x),
            min(self.min_y, p.y),
            max(self.max_y, p.y),
        )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class TurtleState:
    position: Point
    heading: float


@dataclass(frozen=True)
class RenderedDrawing:
    width: int
    height: int
    path_data: str
    border: int

    def to_svg(self) -> str:
        return (
            '<svg xmlns="http://www.w3.org/2000/svg" '
            f'height="{self.height}" width="{self.width}">'
            f'<path d="{self.path_data}" stroke="{STROKE}" fill="none" />'
            "</svg>"
        )


@dataclass(frozen=True)
class EmptyDrawing:
    """No drawable geometry at this iteration depth. Not an error."""

    def to_svg(self) -> str:
        return '<svg xmlns="http://www.w3.org/2000/svg" height="0" width="0"></svg>'


EMPTY_DRAWING = EmptyDrawing()


@dataclass(frozen=True)
class NotFound:
    name: str
    message: str = "Not found"


Drawing = Union[RenderedDrawing, EmptyDrawing]


# -------------------------
# Grammar engine
# -------------------------


def expand(spec: GrammarSpec, iterations: int) -> str:
    """Apply ``spec.rules`` to the axiom ``iterations`` times."""
    _check_iterations(iterations)
    rules = spec.rules
    state = spec.axiom
    for _ in range(iterations):
        state = "".join([rules.get(ch, ch) for ch in state])
    return state


def stream_expand(
    axiom: str, rules: Mapping[str, str], iterations: int
) -> Generator[str, None, None]:
    """Yield expanded symbols in order without building the full string.

    Uses an explicit stack of (string, index, depth) frames.
    """
    _check_iterations(iterations)

    stack: list[tuple[str, int, int]] = [(axiom, 0, 0)]

    while stack:
        s, i, d = stack.pop()
        if i >= len(s):
            continue

        ch = s[i]
        stack.append((s, i + 1, d))

        if d < iterations and ch in rules:
            # Replacement goes above the continuation so it is fully traversed
            # first; this keeps left-to-right order.
            stack.append((rules[ch], 0, d + 1))
        else:
            yield ch


def expanded_length(spec: GrammarSpec, iterations: int) -> int:
    """Length of ``expand(spec, iterations)``, from substitution counts only."""
    _check_iterations(iterations)
    produces = {sym: Counter(repl) for sym, repl in spec.rules.items()}
    counts = Counter(spec.axiom)
    for _ in range(iterations):
        nxt: Counter[str] = Counter()
        for sym, n in counts.items():
            repl = produces.get(sym)
            if repl is None:
                nxt[sym] += n
                continue
            for out, k in repl.items():
                nxt[out] += n * k
        counts = nxt
    return sum(counts.values())


# -------------------------
# Turtle interpreter
# -------------------------


class Action(enum.Enum):
    FORWARD = "F"
    TURN_LEFT = "+"
    TURN_RIGHT = "-"
    PUSH = "["
    POP = "]"


_ACTIONS: dict[str, Action] = {a.value: a for a in Action}


def interpret(
    symbols: Iterable[str], turn_angle: float, step_length: float
) -> tuple[list[PathOp], BoundingBox]:
    """Walk ``symbols`` with a turtle starting at the origin, heading 0.

    ``+`` adds ``turn_angle`` to the heading, ``-`` subtracts it; the heading
    is never normalised. ``[`` saves a by-value snapshot, ``]`` restores it and
    emits a MoveTo. Symbols outside the five actions are ignored.

    The bounding box starts at the origin and is widened with the unrounded
    position after every forward step.
    """
    _require(step_length > 0, "step length must be > 0")

    x, y, heading = ORIGIN.x, ORIGIN.y, 0.0
    box = BoundingBox.at(ORIGIN)
    stack: list[TurtleState] = []
    ops: list[PathOp] = []

    for index, sym in enumerate(symbols):
        action = _ACTIONS.get(sym)
        if action is None:
            continue

        if action is Action.FORWARD:
            x = x + math.cos(heading) * step_length
            y = y + math.sin(heading) * step_length
            p = Point(x, y)
            ops.append(LineTo(p))
            box = box.include(p)
        elif action is Action.TURN_LEFT:
            heading += turn_angle
        elif action is Action.TURN_RIGHT:
            heading -= turn_angle
        elif action is Action.PUSH:
            stack.append(TurtleState(Point(x, y), heading))
        else:
            if not stack:
                raise UnbalancedStack(
                    f"pop '{sym}' at symbol {index} encountered with empty stack"
                )
            st = stack.pop()
            x, y, heading = st.position.x, st.position.y, st.heading
            ops.append(MoveTo(st.position))

    return ops, box


# -------------------------
# Path renderer
# -------------------------


def _token(cmd: str, p: Point, off_x: float, off_y: float) -> str:
    return f"{cmd} {round(p.x + off_x)} {round(p.y + off_y)}"


def render(ops: Sequence[PathOp], box: BoundingBox, border: int) -> Drawing:
    """Serialize ``ops`` onto a canvas that holds ``box`` plus ``border``.

    Coordinates are translated by ``(|min_x| + border, |min_y| + border)`` and
    rounded only here. A path always starts with ``M``: when the turtle's first
    op is a line, an ``M`` at the translated origin is synthesised.
    """
    _require(
        isinstance(border, int) and not isinstance(border, bool) and border >= 0,
        "border must be an integer >= 0",
    )
    if not any(isinstance(op, LineTo) for op in ops):
        return EMPTY_DRAWING

    off_x = abs(box.min_x) + border
    off_y = abs(box.min_y) + border
    width = round(abs(box.min_x) + abs(box.max_x) + 2 * border)
    height = round(abs(box.min_y) + abs(box.max_y) + 2 * border)

    tokens: list[str] = []
    if not isinstance(ops[0], MoveTo):
        tokens.append(_token("M", ORIGIN, off_x, off_y))
    for op in ops:
        cmd = "M" if isinstance(op, MoveTo) else "L"
        tokens.append(_token(cmd, op.point, off_x, off_y))

    return RenderedDrawing(
        width=width, height=height, path_data=" ".join(tokens), border=border
    )


def draw(
    spec: GrammarSpec,
    iterations: int,
    *,
    step_length: float = STEP_LENGTH,
    border: int = BORDER,
) -> Drawing:
    symbols = expand(spec, iterations)
    ops, box = interpret(symbols, spec.turn_angle, step_length)
    return render(ops, box, border)


def _ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)


def write_drawing(drawing: Drawing, out_path: str) -> None:
    _ensure_parent_dir(out_path)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(drawing.to_svg())
        f.write("\n")


# -------------------------
# Catalog
# -------------------------


BUILTIN_GRAMMARS: tuple[GrammarSpec, ...] = (
    GrammarSpec(
        name="DragonCurve",
        axiom="FX",
        rules={"X": "X+YF+", "Y": "-FX-Y"},
        turn_angle=math.pi / 2.0,
        max_prewarm_iterations=14,
    ),
    GrammarSpec(
        name="HilbertCurve",
        axiom="A",
        rules={"A": "-BF+AFA+FB-", "B": "+AF-BFB-FA+"},
        turn_angle=math.pi / 2.0,
        max_prewarm_iterations=6,
    ),
)


class Catalog:
    """Read-only, name-keyed collection of grammars."""

    def __init__(self, grammars: Iterable[GrammarSpec] = ()) -> None:
        self._by_name: dict[str, GrammarSpec] = {}
        for g in grammars:
            _require(g.name not in self._by_name, f"duplicate grammar name '{g.name}'")
            self._by_name[g.name] = g

    @classmethod
    def builtin(cls) -> Catalog:
        return cls(BUILTIN_GRAMMARS)

    def get(self, name: str) -> GrammarSpec | None:
        return self._by_name.get(name)

    def names(self) -> list[str]:
        return list(self._by_name)

    def with_grammars(self, grammars: Iterable[GrammarSpec]) -> Catalog:
        return Catalog(itertools.chain(self._by_name.values(), grammars))

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[GrammarSpec]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)


def parse_grammar(obj: dict[str, Any]) -> GrammarSpec:
    obj = _as_dict(obj, "root")

    name = _as_str(obj.get("name"), "name")
    _require(len(name) > 0, "name must be non-empty")
    axiom = _as_str(obj.get("axiom", ""), "axiom")

    rules_obj = _as_dict(obj.get("rules", {}), "rules")
    rules: dict[str, str] = {}
    for k, v in rules_obj.items():
        _require(len(k) == 1, "rules keys must be single-character strings")
        rules[k] = _as_str(v, f"rules['{k}']")

    angle_deg = _as_float(obj.get("angle", 90), "angle")
    prewarm = _as_int(
        obj.get("max_prewarm_iterations", 0), "max_prewarm_iterations"
    )

    return GrammarSpec(
        name=name,
        axiom=axiom,
        rules=rules,
        turn_angle=math.radians(angle_deg),
        max_prewarm_iterations=prewarm,
    )


def load_json(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            return cast(dict[str, Any], json.load(f))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def load_grammar(path: str) -> GrammarSpec:
    return parse_grammar(load_json(path))


def load_catalog_dir(path: str, base: Catalog | None = None) -> Catalog:
    """Extend ``base`` (the built-ins by default) with every ``*.json`` in ``path``."""
    if base is None:
        base = Catalog.builtin()
    files = sorted(f for f in os.listdir(path) if f.endswith(".json"))
    return base.with_grammars(load_grammar(os.path.join(path, f)) for f in files)


# -------------------------
# Iteration cache
# -------------------------


@dataclass
class _Entry:
    ready: threading.Event = field(default_factory=threading.Event)
    result: Drawing | None = None
    error: BaseException | None = None


class IterationCache:
    """Memoizes drawings per (system name, iterations).

    At most one computation runs per key. The first requester computes outside
    the lock and publishes the finished drawing; concurrent requesters for the
    same key block until it is ready. A failed computation is re-raised to
    every waiter and not cached.
    """

    def __init__(
        self,
        catalog: Catalog,
        *,
        step_length: float = STEP_LENGTH,
        border: int = BORDER,
        iteration_limit: int = DEFAULT_ITERATION_LIMIT,
        symbol_limit: int = DEFAULT_SYMBOL_LIMIT,
    ) -> None:
        self._catalog = catalog
        self._step_length = step_length
        self._border = border
        self._iteration_limit = iteration_limit
        self._symbol_limit = symbol_limit
        self._lock = threading.Lock()
        self._entries: dict[tuple[str, int], _Entry] = {}

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def _check_budget(self, spec: GrammarSpec, iterations: int) -> None:
        _check_iteration_limit(iterations, self._iteration_limit)
        n = expanded_length(spec, iterations)
        if n > self._symbol_limit:
            raise IterationLimitExceeded(
                f"{spec.name} at {iterations} iterations expands to {n} symbols "
                f"(limit {self._symbol_limit})"
            )

    def get(self, name: str, iterations: int) -> Drawing | NotFound:
        _check_iterations(iterations)
        spec = self._catalog.get(name)
        if spec is None:
            return NotFound(name)
        self._check_budget(spec, iterations)

        key = (name, iterations)
        with self._lock:
            entry = self._entries.get(key)
            owner = entry is None
            if entry is None:
                entry = _Entry()
                self._entries[key] = entry

        if not owner:
            if not entry.ready.is_set():
                LOGGER.debug("waiting for in-flight %s/%d", name, iterations)
            entry.ready.wait()
            if entry.error is not None:
                raise entry.error
            LOGGER.debug("cache hit %s/%d", name, iterations)
            return cast(Drawing, entry.result)

        try:
            result = draw(
                spec, iterations, step_length=self._step_length, border=self._border
            )
        except BaseException as e:
            with self._lock:
                del self._entries[key]
            entry.error = e
            entry.ready.set()
            raise

        entry.result = result
        entry.ready.set()
        LOGGER.debug("computed %s/%d", name, iterations)
        return result

    def prewarm(self, names: Iterable[str] | None = None) -> int:
        """Compute iterations 0 .. max_prewarm_iterations - 1 for each grammar."""
        if names is None:
            specs = list(self._catalog)
        else:
            specs = []
            for n in names:
                spec = self._catalog.get(n)
                _require(spec is not None, f"unknown grammar '{n}'")
                specs.append(cast(GrammarSpec, spec))

        count = 0
        for spec in specs:
            for i in range(spec.max_prewarm_iterations):
                self.get(spec.name, i)
                count += 1
            LOGGER.info(
                "prewarmed %s (%d iterations)", spec.name, spec.max_prewarm_iterations
            )
        return count

    def cached_keys(self) -> list[tuple[str, int]]:
        with self._lock:
            return [k for k, e in self._entries.items() if e.ready.is_set()]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple):
            return False
        with self._lock:
            entry = self._entries.get(cast(tuple[str, int], key))
        return entry is not None and entry.ready.is_set()

    def __len__(self) -> int:
        return len(self.cached_keys())


# -------------------------
# CLI / Help
# -------------------------

HELP_EPILOG = r"""
BUILT-IN SYSTEMS

  DragonCurve   axiom FX, X -> X+YF+, Y -> -FX-Y, 90 degrees
  HilbertCurve  axiom A, A -> -BF+AFA+FB-, B -> +AF-BFB-FA+, 90 degrees

TURTLE SYMBOLS

  F   move forward one step and draw
  +   turn by +angle (counter-clockwise, heading 0 = +X)
  -   turn by -angle
  [   save position and heading
  ]   restore the last saved position and heading (pen up, no line drawn)

  Every other symbol is structural only and draws nothing.

GRAMMAR JSON SYNTAX (--catalog DIR, validate)

  name: string (required)
      Unique system name used on the command line.

  axiom: string (default "")
      The initial word.

  rules: object mapping single-character string -> non-empty string
      Production rules. Symbols without a rule are left unchanged.

  angle: number (default 90)
      Turn angle, in degrees.

  max_prewarm_iterations: integer >= 0 (default 0)
      How many iteration depths (0 .. n-1) a cache prewarm computes.

Example

    {
      "name": "KochCurve",
      "axiom": "F",
      "rules": {"F": "F+F-F-F+F"},
      "angle": 90,
      "max_prewarm_iterations": 5
    }
"""


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fractal_curves.py",
        description="Deterministic L-system fractal curves rendered to SVG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    def add_catalog(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--catalog",
            default=None,
            help="Directory of grammar JSON files added to the built-in systems.",
        )

    def add_limit(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--limit",
            type=int,
            default=DEFAULT_ITERATION_LIMIT,
            help=(
                "Largest accepted iteration count "
                f"(default {DEFAULT_ITERATION_LIMIT})."
            ),
        )

    pl = sub.add_parser("list",help="List the available systems.")
    add_catalog(pl)

    pe = sub.add_parser("expand", help="Print the expansion of a system.")
    pe.add_argument("name", help="System name.")
    pe.add_argument("iterations", type=int, help="Number of rewriting passes.")
    pe.add_argument(
        "--length-only",
        action="store_true",
        help="Print only the expansion length, computed without expanding.",
    )
    add_limit(pe)
    add_catalog(pe)

    pr = sub.add_parser("render", help="Render a system to an SVG file.")
    pr.add_argument("name", help="System name.")
    pr.add_argument("iterations", type=int, help="Number of rewriting passes.")
    pr.add_argument("output", help="Path to write the SVG output.")
    pr.add_argument(
        "--border", type=int, default=BORDER, help=f"Canvas margin (default {BORDER})."
    )
    pr.add_argument(
        "--step",
        type=float,
        default=STEP_LENGTH,
        help=f"Forward step length (default {STEP_LENGTH:g}).",
    )
    add_limit(pr)
    add_catalog(pr)

    pv = sub.add_parser(
        "validate", help="Validate a grammar JSON file and print a brief summary."
    )
    pv.add_argument("config", help="Path to the grammar JSON file.")

    return p


# -------------------------
# Commands
# -------------------------


def _load_catalog(catalog_dir: str | None) -> Catalog:
    if catalog_dir is None:
        return Catalog.builtin()
    return load_catalog_dir(catalog_dir)


def cmd_list(catalog_dir: str | None) -> int:
    for spec in _load_catalog(catalog_dir):
        print(f"{spec.name}\tprewarm={spec.max_prewarm_iterations}")
    return 0


def cmd_expand(
    name: str,
    iterations: int,
    catalog_dir: str | None,
    length_only: bool,
    limit: int = DEFAULT_ITERATION_LIMIT,
) -> int:
    _check_iterations(iterations)
    spec = _load_catalog(catalog_dir).get(name)
    if spec is None:
        print(NotFound(name).message, file=sys.stderr)
        return 1
    if length_only:
        print(expanded_length(spec, iterations))
    else:
        # Full expansion is exponential in iterations; counting is not.
        _check_iteration_limit(iterations, limit)
        print(expand(spec, iterations))
    return 0


def cmd_render(
    name: str,
    iterations: int,
    output_path: str,
    *,
    catalog_dir: str | None,
    border: int,
    step: float,
    limit: int,
) -> int:
    cache = IterationCache(
        _load_catalog(catalog_dir),
        step_length=step,
        border=border,
        iteration_limit=limit,
    )
    result = cache.get(name, iterations)
    if isinstance(result, NotFound):
        print(result.message, file=sys.stderr)
        return 1
    if isinstance(result, EmptyDrawing):
        print(f"note: {name} has no drawable geometry at {iterations} iterations")
    write_drawing(result, output_path)
    return 0


_VALIDATE_SYMBOL_LIMIT = 10_000


def cmd_validate(config_path: str) -> int:
    spec = load_grammar(config_path)
    depth = spec.max_prewarm_iterations

    print(f"name: {spec.name}")
    print(f"axiom length: {len(spec.axiom)}")
    print(f"rules: {len(spec.rules)}")
    print(f"angle: {math.degrees(spec.turn_angle):g}deg")
    print(f"max prewarm iterations: {depth}")
    print(f"symbols at depth {depth}: {expanded_length(spec, depth)}")

    # Bounded interpretation to surface unbalanced brackets without paying for
    # the full expansion.
    raw = stream_expand(spec.axiom, spec.rules, depth)
    bounded = list(itertools.islice(raw, _VALIDATE_SYMBOL_LIMIT))
    truncated = len(bounded) == _VALIDATE_SYMBOL_LIMIT
    ops, _ = interpret(bounded, spec.turn_angle, STEP_LENGTH)
    segments = sum(1 for op in ops if isinstance(op, LineTo))
    print(f"segments (sampled): {segments}{'+' if truncated else ''}")
    if truncated:
        print(
            f"warning: expansion exceeds {_VALIDATE_SYMBOL_LIMIT} symbols; "
            "only the first portion was interpreted"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.cmd == "list":
            return cmd_list(args.catalog)
        if args.cmd == "expand":
            return cmd_expand(
                args.name,
                args.iterations,
                args.catalog,
                args.length_only,
                limit=args.limit,
            )
        if args.cmd == "render":
            return cmd_render(
                args.name,
                args.iterations,
                args.output,
                catalog_dir=args.catalog,
                border=args.border,
                step=args.step,
                limit=args.limit,
            )
        if args.cmd == "validate":
            return cmd_validate(args.config)
        raise AssertionError("unreachable")
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    except InvalidIteration as e:
        print(f"Iteration error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
