import json
from datetime import datetime
from pathlib import Path

from harness_config import HarnessConfig
from report import archive_files, log_to_csv, summarize, write_html_report, write_results_json
from runner import run_test_suite
from scenario_cases import ScenarioCase, build_cases


async def run_suite(config: HarnessConfig | None = None, cases: list[ScenarioCase] | None = None) -> dict:
    """Run the scenario tables once and write the run's artifacts.

    Artifacts land in <runs_dir>/run_<timestamp>/: test_cases.json,
    results.json, report.html, archive.zip and run_log.csv.
    """
    config = config or HarnessConfig.from_env()
    cases = build_cases() if cases is None else cases

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = Path(config.runs_dir) / f"run_{timestamp}"
    run_dir.mkdir(parents=True, exist_ok=True)

    test_cases_path = run_dir / "test_cases.json"
    with open(test_cases_path, "w", encoding="utf-8") as f:
        json.dump([c.to_dict() for c in cases], f, indent=2, ensure_ascii=False)
    print(f"📄 Test cases written: {test_cases_path}")

    print(f"🏃 Running {len(cases)} scenario(s) against {config.base_url}...")
    results_json = await run_test_suite(cases, config, run_dir)
    counts = summarize(results_json)

    artifacts = {
        "test_cases": test_cases_path,
        "results": write_results_json(results_json, run_dir / "results.json"),
        "report": write_html_report(results_json, run_dir / "report.html"),
    }
    print(f"📊 Results written: {artifacts['results']}")
    print(f"📝 HTML report: {artifacts['report']}")
    artifacts["archive"] = archive_files(
        run_dir / "archive.zip", [test_cases_path, artifacts["results"], artifacts["report"]]
    )
    print(f"📦 Archive: {artifacts['archive']}")
    log_to_csv(run_dir / "run_log.csv", timestamp, artifacts, counts)

    if counts["total"]:
        print(f"✅ Done. Total: {counts['total']}, Passed: {counts['passed']}, Failed: {counts['failed']}")
    else:
        print("✅ Done. No scenarios executed (empty selection).")
    return {**results_json, "summary": counts, "artifacts": {k: str(v) for k, v in artifacts.items()}}
