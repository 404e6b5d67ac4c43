from cancer_cv.models.classifiers import KernelNaiveBayes, NearestNeighborVote
from cancer_cv.models.trainer import MODEL_CONFIGS, ModelTrainer, build_model

__all__ = [
    "MODEL_CONFIGS",
    "ModelTrainer",
    "build_model",
    "KernelNaiveBayes",
    "NearestNeighborVote",
]
