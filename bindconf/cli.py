"""Command-line interface for the binding conformance generator."""

import argparse
import json
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="bindconf",
        description="Generate and run WGSL @group/@binding conformance cases",
    )
    parser.add_argument(
        "--list", action="store_true", help="List scenarios and their case counts"
    )
    parser.add_argument(
        "-s", "--scenario", action="append", metavar="NAME",
        help="Run only the named scenario (repeatable)",
    )
    parser.add_argument(
        "--compiler", choices=("reference", "naga"), default="reference",
        help="Compiler to validate generated shaders with (default: reference)",
    )
    parser.add_argument(
        "--naga", type=str, default=None, metavar="PATH",
        help="Path to the naga executable (default: naga on PATH)",
    )
    parser.add_argument(
        "--emit-dir", type=Path, default=None,
        help="Write generated .wgsl cases and a manifest instead of compiling",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Shuffle case execution order with this seed",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Print every case result"
    )
    parser.add_argument(
        "--version", action="version", version="bindconf 0.1.0"
    )

    args = parser.parse_args(argv)

    from bindconf.matrix.scenarios import SCENARIOS, get_scenario

    try:
        if args.scenario:
            scenarios = [get_scenario(name) for name in args.scenario]
        else:
            scenarios = list(SCENARIOS)
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        sys.exit(1)

    # --- List mode ---
    if args.list:
        for scenario in scenarios:
            print(f"{scenario.name:<24} {len(scenario):>5}  {scenario.description}")
        return

    # --- Emit mode ---
    if args.emit_dir:
        count = _emit_cases(scenarios, args.emit_dir)
        print(f"Wrote {count} cases to {args.emit_dir}")
        return

    # --- Run mode ---
    from bindconf.compilers.base import get_compiler
    from bindconf.runner import run_scenarios

    compiler = get_compiler(args.compiler, naga_path=args.naga)
    results = run_scenarios(scenarios, compiler, seed=args.seed)

    failed = [r for r in results if not r.passed]
    for r in results:
        if not r.passed:
            print(f"FAIL {r.case_id}\n{r.error}\n", file=sys.stderr)
        elif args.verbose:
            print(f"pass {r.case_id}")

    print(f"{len(results) - len(failed)} passed, {len(failed)} failed ({compiler.name})")
    if failed:
        sys.exit(1)


def _emit_cases(scenarios, emit_dir: Path) -> int:
    from bindconf.runner import synthesize_case

    manifest = []
    for scenario in scenarios:
        scenario_dir = emit_dir / scenario.name
        scenario_dir.mkdir(parents=True, exist_ok=True)
        for index, params in enumerate(scenario.params):
            source, verdict = synthesize_case(scenario, params)
            path = scenario_dir / f"{index:04d}.wgsl"
            path.write_text(source, encoding="utf-8")
            manifest.append({
                "scenario": scenario.name,
                "file": path.relative_to(emit_dir).as_posix(),
                "params": {k: _json_value(v) for k, v in params.items()},
                "expect": verdict.accepted,
                "reasons": verdict.reasons,
            })

    manifest_path = emit_dir / "manifest.json"
    manifest_path.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
    return len(manifest)


def _json_value(value):
    if isinstance(value, (bool, int, str)):
        return value
    return str(value)


if __name__ == "__main__":
    main()
