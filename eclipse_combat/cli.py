from __future__ import annotations
import argparse, json, logging, sys, time
from typing import Any, Dict, List

from .config import (
    ENV_PREFIX,
    apply_cli_overrides,
    build_scenario,
    env_overrides,
    load_configs,
)
from .exceptions import ConfigurationError
from .simulator import CombatSimulator, SimulationResult


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="python -m eclipse_combat.cli",
        description="Eclipse fleet battle simulator"
    )
    sub = p.add_subparsers(dest="cmd")

    # simulate
    sm = sub.add_parser("simulate", help="Run the Monte Carlo gauntlet once and print odds")
    _add_common_args(sm)
    sm.add_argument("--json", action="store_true", help="Print the result as JSON")

    # bench
    bn = sub.add_parser("bench", help="Repeat the simulation over several seeds to measure spread/perf")
    _add_common_args(bn)
    bn.add_argument("--seeds", type=int, default=8, help="Number of seeds")
    bn.add_argument("--out", type=str, default=None, help="Save benchmark JSON")

    args = p.parse_args(argv)
    if getattr(args, "cmd", None) is None:
        p.print_help()
        sys.exit(2)
    return args


def _add_common_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--config", type=str, action="append", default=[], required=True,
                    help="YAML/JSON scenario files (merged in order)")
    ap.add_argument("--env-prefix", type=str, default=ENV_PREFIX, help="Env prefix for overrides")
    ap.add_argument("--iterations", type=int, default=None, help="Override the iteration count")
    ap.add_argument("--seed", type=int, default=None, help="Seed the dice for a reproducible run")
    ap.add_argument("--log-level", type=str, default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])


def _load_cfg(args: argparse.Namespace) -> Dict[str, Any]:
    cfg = load_configs(args.config)
    cfg = apply_cli_overrides(cfg, env_overrides(args.env_prefix))
    flags: Dict[str, Any] = {}
    if args.iterations is not None:
        flags["iterations"] = args.iterations
    if args.seed is not None:
        flags["seed"] = args.seed
    return apply_cli_overrides(cfg, flags)


def format_result(result: SimulationResult) -> str:
    lines = [f"{result.iterations} iterations in {result.time_taken:.2f}s", ""]
    ranked = sorted(result.victory_probability.items(), key=lambda kv: kv[1], reverse=True)
    width = max([len(name) for name, _ in ranked] + [4])
    for name, prob in ranked:
        lines.append(f"  {name:<{width}}  {prob:7.2%}")
    if result.draw_probability > 0:
        lines.append(f"  {'Draw':<{width}}  {result.draw_probability:7.2%}")
    survivors = [(n, s) for n, s in result.expected_survivors.items() if s]
    if survivors:
        lines.append("")
        lines.append("Expected survivors when victorious:")
        for name, by_type in survivors:
            parts = ", ".join(f"{t} {n:.2f}" for t, n in sorted(by_type.items()))
            lines.append(f"  {name}: {parts}")
    return "\n".join(lines)


def _simulate(args: argparse.Namespace) -> SimulationResult:
    scenario = build_scenario(_load_cfg(args))
    return CombatSimulator().simulate(scenario.fleets, scenario.iterations)


def _bench(args: argparse.Namespace) -> Dict[str, Any]:
    cfg = _load_cfg(args)
    seeds = int(args.seeds)
    odds: Dict[str, List[float]] = {}
    iterations = 0
    t0 = time.perf_counter()

    for s in range(seeds):
        # fresh fleets per seed so dice streams are independent
        scenario = build_scenario(apply_cli_overrides(cfg, {"seed": s}))
        result = CombatSimulator().simulate(scenario.fleets, scenario.iterations)
        iterations += result.iterations
        for name, prob in result.victory_probability.items():
            odds.setdefault(name, []).append(prob)

    t1 = time.perf_counter()
    elapsed = max(1e-9, t1 - t0)
    return {
        "seeds": seeds,
        "iterations": iterations,
        "iterations_per_sec": iterations / elapsed,
        "victory_probability": {
            name: {"mean": sum(v) / len(v), "min": min(v), "max": max(v)}
            for name, v in odds.items()
        },
    }


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        if args.cmd == "simulate":
            result = _simulate(args)
            if args.json:
                print(json.dumps(result.to_dict(), indent=2))
            else:
                print(format_result(result))
            return 0

        if args.cmd == "bench":
            out = _bench(args)
            if args.out:
                with open(args.out, "w", encoding="utf-8") as f:
                    json.dump(out, f, indent=2)
            print(json.dumps(out, indent=2))
            return 0
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
