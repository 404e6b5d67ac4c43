"""
Breast-mass diagnosis cross-validation study.

Orchestrates the full run: data loading -> EDA -> fold partitioning ->
per-model cross-validation -> hyperparameter sweeps -> reporting. Every
model and every hyperparameter value is scored on the same fold partition,
created once from the configured seed.
"""

import os
import traceback

from cancer_cv import __version__
from cancer_cv.analysis import DataExplorer
from cancer_cv.config import (
    NEURAL_NETWORK_GRID,
    SVM_GRID,
    ExperimentConfig,
)
from cancer_cv.data import DatasetLoader
from cancer_cv.evaluation import Reporter
from cancer_cv.utils import get_logger
from cancer_cv.validation import CrossValidator, partition

log = get_logger("cancer_cv")

DISCLAIMER = (
    "DISCLAIMER: This study is an ML research tool for analyzing a publicly "
    "available cancer dataset. It does NOT provide medical diagnoses, "
    "treatment recommendations, or replace professional medical advice. "
    "All outputs are for research and educational purposes only."
)

STAGES = [
    "Data Loading",
    "Exploratory Analysis",
    "Fold Partitioning",
    "Model Cross-Validation",
    "Hyperparameter Sweeps",
    "Report Generation",
]


class CancerCVStudy:
    """
    Runs the complete study for one :class:`ExperimentConfig`.

    Stages:
        1. Data Loading           - read and validate the measurement table
        2. Exploratory Analysis   - statistics, correlations, PCA
        3. Fold Partitioning      - one seeded K-fold split for everything
        4. Model Cross-Validation - each selected model at its defaults
        5. Hyperparameter Sweeps  - KNN k range, SVM kernel/cost, network widths
        6. Report Generation      - console tables and report.json
    """

    def __init__(self, config: ExperimentConfig | None = None, on_progress=None,
                 write_report: bool = True):
        self.config = config or ExperimentConfig()
        self.on_progress = on_progress
        self.write_report = write_report

        # Pipeline state
        self.dataset = None
        self.eda_report = None
        self.partition = None
        self.cv_results = []
        self.sweeps = {}
        self.report = None

    def run(self) -> dict:
        """
        Execute every stage in order.

        Returns the final report dict.
        """
        log.info("=" * 60)
        log.info("BREAST-MASS DIAGNOSIS CV STUDY v%s", __version__)
        log.info("=" * 60)
        log.info("")
        log.info(DISCLAIMER)
        log.info("")

        stage_fns = [
            self._stage_load,
            self._stage_eda,
            self._stage_partition,
            self._stage_cross_validate,
            self._stage_sweeps,
            self._stage_report,
        ]

        total = len(STAGES)
        for i, (stage_name, stage_fn) in enumerate(zip(STAGES, stage_fns), start=1):
            label = f"{i}/{total} {stage_name}"
            log.info("")
            log.info("-" * 60)
            log.info("STAGE: %s", label)
            log.info("-" * 60)
            if self.on_progress:
                self.on_progress(i, total, stage_name)
            try:
                stage_fn()
            except Exception:
                log.error("Stage '%s' failed:\n%s", label, traceback.format_exc())
                raise

        return self.report

    def _validator(self) -> CrossValidator:
        return CrossValidator(
            self.dataset,
            self.partition,
            scaling=self.config.scaling,
            seed=self.config.seed,
        )

    def _stage_load(self):
        self.dataset = DatasetLoader().load(self.config.data_path)

    def _stage_eda(self):
        self.eda_report = DataExplorer().run(self.dataset)

    def _stage_partition(self):
        self.partition = partition(
            self.dataset.n_samples, self.config.folds, self.config.seed
        )
        log.info(
            "Partitioned %d rows into %d folds of sizes %s (seed=%d)",
            self.partition.n_samples, self.partition.n_folds,
            self.partition.fold_sizes, self.partition.seed,
        )

    def _stage_cross_validate(self):
        validator = self._validator()
        self.cv_results = [validator.run(name) for name in self.config.models]
        best = max(self.cv_results, key=lambda r: r.mean.accuracy)
        log.info(
            "Best model: %s (CV accuracy=%.2f%%)",
            best.model, best.mean.accuracy * 100,
        )

    def _stage_sweeps(self):
        if not self.config.run_sweeps:
            log.info("Sweeps disabled; skipping")
            return

        validator = self._validator()
        selected = set(self.config.models)
        if "knn" in selected:
            self.sweeps["knn_k"] = validator.knn_sweep(range(1, self.config.k_max + 1))
        if "svm" in selected:
            self.sweeps["svm_kernel_cost"] = validator.grid_sweep("svm", SVM_GRID)
        if "neural_network" in selected:
            self.sweeps["neural_network_layers"] = validator.grid_sweep(
                "neural_network", NEURAL_NETWORK_GRID
            )

        for name, sweep in self.sweeps.items():
            best = sweep.best()
            log.info(
                "Best %s setting: %s (accuracy=%.2f%%)",
                name, best.params, best.mean.accuracy * 100,
            )

    def _stage_report(self):
        reporter = Reporter()
        self.report = reporter.generate(
            dataset_metadata=self.dataset.metadata,
            eda_report=self.eda_report,
            partition_summary=self.partition.summary(),
            cv_results=self.cv_results,
            sweeps=self.sweeps,
            settings=self.config.model_dump(),
        )

        summary = reporter.print_summary(self.report)
        print("\n" + summary)

        if self.write_report:
            os.makedirs(self.config.output_dir, exist_ok=True)
            json_path = os.path.join(self.config.output_dir, "report.json")
            reporter.save_json(self.report, json_path)
            log.info("Full JSON report saved to: %s", json_path)
