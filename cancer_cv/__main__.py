"""CLI entry point: python -m cancer_cv"""

import argparse
import logging
import sys

from pydantic import ValidationError

from cancer_cv.config import (
    DEFAULT_FOLDS,
    DEFAULT_K_MAX,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SEED,
    MODEL_NAMES,
    SCALING_METHODS,
    ExperimentConfig,
)
from cancer_cv.models.trainer import MODEL_CONFIGS
from cancer_cv.study import CancerCVStudy
from cancer_cv.utils import set_level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cancer-cv",
        description=(
            "Breast-mass diagnosis study - exploratory analysis and K-fold "
            "cross-validation of KNN, Naive Bayes, SVM and a neural network."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m cancer_cv\n"
            "  python -m cancer_cv --data wdbc.data --seed 7\n"
            "  python -m cancer_cv --models knn svm --k-max 15 --no-sweeps\n"
            "  python -m cancer_cv --output-dir ./results\n"
        ),
    )

    parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="Headerless WDBC CSV (id, diagnosis, 30 features); "
             "default: bundled copy of the dataset",
    )
    parser.add_argument(
        "--models",
        type=str,
        nargs="+",
        default=list(MODEL_NAMES),
        choices=list(MODEL_NAMES),
        help="Models to cross-validate (default: all)",
    )
    parser.add_argument(
        "--folds",
        type=int,
        default=DEFAULT_FOLDS,
        help=f"Number of cross-validation folds (default: {DEFAULT_FOLDS})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help=f"Seed for the fold partition and the network (default: {DEFAULT_SEED})",
    )
    parser.add_argument(
        "--k-max",
        type=int,
        default=DEFAULT_K_MAX,
        help=f"Largest k in the KNN sweep (default: {DEFAULT_K_MAX})",
    )
    parser.add_argument(
        "--scaling",
        type=str,
        default="standard",
        choices=list(SCALING_METHODS),
        help="Per-fold feature scaling (default: standard)",
    )
    parser.add_argument(
        "--no-sweeps",
        action="store_true",
        help="Skip the hyperparameter sweeps",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for report.json (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--list-models",
        action="store_true",
        help="List all available models and exit",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log per-fold metrics",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.list_models:
        print("Available models:")
        for name in MODEL_CONFIGS:
            cls, _ = MODEL_CONFIGS[name]
            print(f"  {name:<25} ({cls.__name__})")
        return 0

    if args.verbose:
        set_level(logging.DEBUG)

    try:
        config = ExperimentConfig(
            data_path=args.data,
            folds=args.folds,
            seed=args.seed,
            k_max=args.k_max,
            scaling=args.scaling,
            models=args.models,
            run_sweeps=not args.no_sweeps,
            output_dir=args.output_dir,
        )
    except ValidationError as e:
        print(f"\nInvalid configuration:\n{e}", file=sys.stderr)
        return 2

    study = CancerCVStudy(config)
    try:
        study.run()
    except Exception as e:
        print(f"\nStudy failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
