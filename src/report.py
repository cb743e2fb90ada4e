import csv
import html
import json
import zipfile
from pathlib import Path


def summarize(results_json: dict) -> dict:
    tests = results_json.get("tests", [])
    passed = sum(1 for r in tests if r.get("status") == "passed")
    failed = sum(1 for r in tests if r.get("status") == "failed")
    return {"total": len(tests), "passed": passed, "failed": failed}


def write_results_json(results_json: dict, path: Path) -> Path:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(results_json, f, indent=2, ensure_ascii=False)
    return path


def render_test_result(test_result: dict) -> str:
    status_class = "pass" if test_result.get("status") == "passed" else "fail"
    name = html.escape(test_result.get("name", "Unnamed Test"))
    error = test_result.get("error", "")
    screenshot = test_result.get("screenshot", "")
    kind = test_result.get("failure_kind") or ""
    details_rendered = html.escape(json.dumps(test_result.get("details", {}), indent=2, ensure_ascii=False))
    img_tag = f"<div><img src=\"{html.escape(screenshot)}\" style=\"max-width: 100%; border: 1px solid #ddd;\" /></div>" if screenshot else ""
    error_block = f"<pre>{html.escape(kind + ': ' if kind else '')}{html.escape(error)}</pre>" if error else ""
    return f"""
  <section>
    <h3 class="{status_class}">{name} — {test_result.get('status', 'unknown').upper()}</h3>
    <div class="meta">Suite: {html.escape(test_result.get('suite', ''))} &nbsp; Anchor: <code>{html.escape(test_result.get('anchor', ''))}</code> &nbsp; {test_result.get('duration_ms', 0)}ms</div>
    <details>
      <summary>Details</summary>
      <pre>{details_rendered}</pre>
    </details>
    {img_tag}
    {error_block}
  </section>
  <hr />
"""


def write_html_report(results_json: dict, html_path: Path) -> Path:
    counts = summarize(results_json)
    page = f"""<html><head><meta charset="utf-8" /><title>Translator UI Test Report</title>
<style>
body {{ font-family: Arial, sans-serif; padding: 20px; }}
.summary {{ margin-bottom: 16px; }}
.meta {{ color: #555; margin-bottom: 8px; }}
.pass {{ color: #0a7b44; }}
.fail {{ color: #b00020; }}
pre {{ background: #f6f8fa; padding: 12px; border-radius: 6px; overflow: auto; }}
</style>
</head><body>
  <h1>Translator UI Test Report</h1>
  <div class="summary">
    <strong>Total:</strong> {counts['total']} &nbsp; <strong class="pass">Passed:</strong> {counts['passed']} &nbsp; <strong class="fail">Failed:</strong> {counts['failed']}
  </div>
  <hr />
  {''.join(render_test_result(tr) for tr in results_json.get('tests', []))}
</body></html>
"""
    with open(html_path, "w", encoding="utf-8") as f:
        f.write(page)
    return html_path


def archive_files(zip_path: Path, files: list[Path]) -> Path:
    with zipfile.ZipFile(zip_path, "w") as zf:
        for f in files:
            if f.exists():
                zf.write(f, arcname=f.name)
    return zip_path


def log_to_csv(log_path: Path, timestamp: str, artifacts: dict, counts: dict | None = None) -> None:
    counts = counts or {}
    csv_exists = log_path.exists()
    with open(log_path, "a", newline="", encoding="utf-8") as csvfile:
        writer = csv.writer(csvfile)
        if not csv_exists:
            writer.writerow(["Timestamp", "Total", "Passed", "Failed", "Test Cases", "Results", "Report", "Archive"])
        writer.writerow([
            timestamp,
            counts.get("total", ""),
            counts.get("passed", ""),
            counts.get("failed", ""),
            str(artifacts.get("test_cases", "")),
            str(artifacts.get("results", "")),
            str(artifacts.get("report", "")),
            str(artifacts.get("archive", "")),
        ])
