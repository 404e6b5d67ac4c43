"""Report compilation, console summary and JSON output."""

import json
from datetime import datetime, timezone

import numpy as np
import pandas as pd

from cancer_cv import __version__
from cancer_cv.utils import get_logger

log = get_logger(__name__)

METRIC_COLUMNS = ["accuracy", "sensitivity", "specificity"]


class Reporter:
    """Turns study results into a serialisable report and readable tables."""

    def generate(self, dataset_metadata: dict, eda_report: dict | None,
                 partition_summary: dict, cv_results: list, sweeps: dict,
                 settings: dict | None = None) -> dict:
        """
        Compile the final report.

        ``cv_results`` is a list of ``CVResult`` and ``sweeps`` maps a sweep
        name to a ``SweepResult``; both are flattened to plain dicts here.
        """
        model_rows = [r.to_dict() for r in cv_results]
        best = max(cv_results, key=lambda r: r.mean.accuracy) if cv_results else None

        report = {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
            "settings": settings or {},
            "dataset": dataset_metadata,
            "eda": eda_report or {},
            "partition": partition_summary,
            "models": model_rows,
            "best_model": {
                "name": best.model,
                "params": best.params,
                "metrics_pct": best.mean.as_percentages(),
            } if best else None,
            "sweeps": {name: sweep.to_dict() for name, sweep in sweeps.items()},
        }
        log.info(
            "Report compiled: %d models, %d sweeps", len(model_rows), len(sweeps)
        )
        return self._make_serializable(report)

    def model_table(self, report: dict) -> pd.DataFrame:
        """One row per cross-validated model, metrics in percent."""
        rows = [
            {"model": m["model"], **m["mean_pct"]}
            for m in report["models"]
        ]
        return pd.DataFrame(rows, columns=["model"] + METRIC_COLUMNS)

    def sweep_table(self, report: dict, name: str) -> pd.DataFrame:
        sweep = report["sweeps"][name]
        rows = []
        for entry in sweep["results"]:
            params = {
                k: "x".join(map(str, v)) if isinstance(v, list) else v
                for k, v in entry["params"].items()
            }
            rows.append({**params, **{c: entry[c] for c in METRIC_COLUMNS}})
        return pd.DataFrame(rows)

    def print_summary(self, report: dict) -> str:
        """Render the report as plain text tables."""
        lines = []
        bar = "=" * 60
        lines.append(bar)
        lines.append("BREAST-MASS DIAGNOSIS CROSS-VALIDATION REPORT")
        lines.append(bar)

        ds = report["dataset"]
        lines.append(
            f"Dataset: {ds.get('source')} "
            f"({ds.get('n_samples')} samples, {ds.get('n_features')} features)"
        )
        dist = ds.get("class_distribution", {})
        if dist:
            lines.append(
                "Classes: " + ", ".join(f"{k}={v}" for k, v in dist.items())
            )
        part = report["partition"]
        lines.append(
            f"Folds: {part['n_folds']} (sizes {part['fold_sizes']}), seed {part['seed']}"
        )

        pca = report.get("eda", {}).get("pca")
        if pca:
            lines.append(
                "PCA: PC1 explains {:.1f}% of variance; components for 90%/95%: {}/{}".format(
                    pca["explained_variance_ratio"][0] * 100,
                    pca["components_for_variance"]["90%"],
                    pca["components_for_variance"]["95%"],
                )
            )

        if report["models"]:
            lines.append("")
            lines.append("Cross-validated models (mean over folds, %)")
            lines.append("-" * 60)
            lines.append(self.model_table(report).to_string(index=False))

        for name in report["sweeps"]:
            sweep = report["sweeps"][name]
            lines.append("")
            lines.append(f"Sweep: {name} (mean over folds, %)")
            lines.append("-" * 60)
            lines.append(self.sweep_table(report, name).to_string(index=False))
            lines.append(f"Best: {sweep['best_params']} -> {sweep['best_pct']}")

        best = report.get("best_model")
        if best:
            lines.append("")
            lines.append(
                f"Best model: {best['name']} "
                f"(accuracy {best['metrics_pct']['accuracy']:.2f}%)"
            )
        lines.append(bar)
        return "\n".join(lines)

    def save_json(self, report: dict, path: str) -> None:
        with open(path, "w") as f:
            json.dump(self._make_serializable(report), f, indent=2)

    def _make_serializable(self, obj):
        """Recursively convert NumPy / pandas values to native Python types."""
        if isinstance(obj, dict):
            return {str(k): self._make_serializable(v) for k, v in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [self._make_serializable(v) for v in obj]
        if isinstance(obj, np.ndarray):
            return [self._make_serializable(v) for v in obj.tolist()]
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            value = float(obj)
            return value if np.isfinite(value) else None
        if isinstance(obj, float) and not np.isfinite(obj):
            return None
        if isinstance(obj, np.bool_):
            return bool(obj)
        if isinstance(obj, pd.Timestamp):
            return obj.isoformat()
        return obj
