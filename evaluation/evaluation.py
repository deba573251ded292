#!/usr/bin/env python3
"""
Evaluation runner for the Huffman codec.

This evaluation script:
- Runs the pytest suite in tests/ and collects individual test outcomes
- Compresses a set of sample inputs and checks that each one round-trips
- Generates a structured JSON report with environment metadata

Run with:
    python evaluation/evaluation.py [--output report.json] [--skip-tests]
"""
import os
import sys
import json
import uuid
import random
import platform
import subprocess
import time
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from huffman_config import settings  # noqa: E402
from huffman_service import HuffmanService  # noqa: E402


def generate_run_id():
    """Generate a short unique run ID."""
    return uuid.uuid4().hex[:8]


def get_git_info():
    """Get git commit and branch information."""
    git_info = {"git_commit": "unknown", "git_branch": "unknown"}
    commands = {
        "git_commit": ["git", "rev-parse", "HEAD"],
        "git_branch": ["git", "rev-parse", "--abbrev-ref", "HEAD"],
    }
    for key, cmd in commands.items():
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=5, cwd=str(PROJECT_ROOT))
        except (OSError, subprocess.TimeoutExpired):
            continue
        if result.returncode == 0:
            value = result.stdout.strip()
            git_info[key] = value[:8] if key == "git_commit" else value
    return git_info


def get_environment_info():
    """Collect environment information for the report."""
    git_info = get_git_info()

    return {
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "os": platform.system(),
        "architecture": platform.machine(),
        "hostname": platform.node(),
        "git_commit": git_info["git_commit"],
        "git_branch": git_info["git_branch"],
    }


def parse_pytest_verbose_output(output):
    """Parse pytest verbose output to extract test results."""
    tests = []
    statuses = {" PASSED": "passed", " FAILED": "failed", " ERROR": "error", " SKIPPED": "skipped"}

    for line in output.split("\n"):
        line_stripped = line.strip()
        # tests/test_huffman_core.py::test_prefix_free PASSED                 [ 10%]
        if "::" not in line_stripped:
            continue
        for status_word, outcome in statuses.items():
            if status_word in line_stripped:
                nodeid = line_stripped.split(status_word)[0].strip()
                tests.append({
                    "nodeid": nodeid,
                    "name": nodeid.split("::")[-1],
                    "outcome": outcome,
                })
                break

    return tests


def summarize(tests):
    return {
        "total": len(tests),
        "passed": sum(1 for t in tests if t["outcome"] == "passed"),
        "failed": sum(1 for t in tests if t["outcome"] == "failed"),
        "errors": sum(1 for t in tests if t["outcome"] == "error"),
        "skipped": sum(1 for t in tests if t["outcome"] == "skipped"),
    }


def run_pytest(tests_dir, timeout=None):
    """
    Run pytest on the tests/ folder in a subprocess.

    Returns dict with test results.
    """
    print(f"\n{'=' * 60}")
    print("RUNNING TESTS")
    print(f"{'=' * 60}")
    print(f"Tests directory: {tests_dir}")

    cmd = [sys.executable, "-m", "pytest", str(tests_dir), "-v", "--tb=short"]
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
            env=env,
            timeout=timeout or settings.eval_timeout,
        )
    except subprocess.TimeoutExpired:
        print("❌ Test execution timed out")
        return {
            "success": False,
            "exit_code": -1,
            "tests": [],
            "summary": {"error": "Test execution timed out"},
            "stdout": "",
            "stderr": "",
        }

    tests = parse_pytest_verbose_output(result.stdout)
    summary = summarize(tests)

    print(
        f"\nResults: {summary['passed']} passed, {summary['failed']} failed, "
        f"{summary['errors']} errors, {summary['skipped']} skipped (total: {summary['total']})"
    )
    for test in tests:
        status_icon = {
            "passed": "✅",
            "failed": "❌",
            "error": "💥",
            "skipped": "⏭️",
        }.get(test["outcome"], "❓")
        print(f"  {status_icon} {test['nodeid']}: {test['outcome']}")

    return {
        "success": result.returncode == 0,
        "exit_code": result.returncode,
        "tests": tests,
        "summary": summary,
        "stdout": result.stdout[-3000:],
        "stderr": result.stderr[-1000:],
    }


def sample_inputs(seed=0):
    rng = random.Random(seed)
    return {
        "english_text": "the quick brown fox jumps over the lazy dog. " * 200,
        "skewed_text": "".join(rng.choices("abcdefgh", weights=[128, 64, 32, 16, 8, 4, 2, 1], k=20000)),
        "single_symbol": "z" * 4096,
        "all_bytes": bytes(range(256)) * 16,
        "random_bytes": bytes(rng.getrandbits(8) for _ in range(64 * 1024)),
    }


def run_compression_benchmark(samples=None):
    """Compress each sample, check the round trip and record size and timing."""
    print(f"\n{'=' * 60}")
    print("COMPRESSION BENCHMARK")
    print(f"{'=' * 60}")

    service = HuffmanService()
    results = {}
    for name, data in (samples or sample_inputs()).items():
        original_size = len(data.encode("utf-8")) if isinstance(data, str) else len(data)
        t0 = time.perf_counter()
        compressed = service.compress(data)
        t1 = time.perf_counter()
        restored = service.decompress(compressed)
        t2 = time.perf_counter()

        results[name] = {
            "original_bytes": original_size,
            "compressed_bytes": len(compressed),
            "ratio": round(len(compressed) / original_size, 4) if original_size else None,
            "compress_seconds": round(t1 - t0, 6),
            "decompress_seconds": round(t2 - t1, 6),
            "roundtrip_ok": restored == data,
        }
        icon = "✅" if results[name]["roundtrip_ok"] else "❌"
        print(f"  {icon} {name}: {original_size} -> {len(compressed)} bytes")

    return results


def run_evaluation(skip_tests=False):
    """
    Run the test suite and the compression benchmark.

    Returns dict with both results.
    """
    print(f"\n{'=' * 60}")
    print("HUFFMAN CODEC EVALUATION")
    print(f"{'=' * 60}")

    tests = None if skip_tests else run_pytest(PROJECT_ROOT / "tests")
    benchmark = run_compression_benchmark()

    print(f"\n{'=' * 60}")
    print("EVALUATION SUMMARY")
    print(f"{'=' * 60}")
    if tests is not None:
        print(f"  Tests: {'✅ PASSED' if tests['success'] else '❌ FAILED'}")
    roundtrips_ok = all(entry["roundtrip_ok"] for entry in benchmark.values())
    print(f"  Round trips: {'✅ OK' if roundtrips_ok else '❌ BROKEN'}")

    return {
        "tests": tests,
        "benchmark": benchmark,
        "success": roundtrips_ok and (tests is None or tests["success"]),
    }


def generate_output_path():
    """Generate output path in format: evaluation/YYYY-MM-DD/HH-MM-SS/report.json"""
    now = datetime.now()
    output_dir = PROJECT_ROOT / "evaluation" / now.strftime("%Y-%m-%d") / now.strftime("%H-%M-%S")
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / "report.json"


def main(argv=None):
    """Main entry point for evaluation."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the Huffman codec evaluation")
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)",
    )
    parser.add_argument("--skip-tests", action="store_true", help="Only run the compression benchmark")
    args = parser.parse_args(argv)

    run_id = generate_run_id()
    started_at = datetime.now()
    print(f"Run ID: {run_id}")
    print(f"Started at: {started_at.isoformat()}")

    results = run_evaluation(skip_tests=args.skip_tests)
    success = results["success"]

    finished_at = datetime.now()
    duration = (finished_at - started_at).total_seconds()

    report = {
        "run_id": run_id,
        "started_at": started_at.isoformat(),
        "finished_at": finished_at.isoformat(),
        "duration_seconds": round(duration, 6),
        "success": success,
        "environment": get_environment_info(),
        "results": results,
    }

    output_path = Path(args.output) if args.output else generate_output_path()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)
    print(f"\n✅ Report saved to: {output_path}")
    print(f"Duration: {duration:.2f}s")
    print(f"Success: {'✅ YES' if success else '❌ NO'}")

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
