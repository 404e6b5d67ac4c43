"""
Breast-mass diagnosis cross-validation study.

Loads the Wisconsin Diagnostic Breast Cancer measurements, runs exploratory
analysis (descriptive statistics, correlations, PCA), and cross-validates
K-Nearest Neighbors, kernel Naive Bayes, SVM and a two-hidden-layer neural
network on one fixed, seeded fold partition.

DISCLAIMER: This is a machine learning research tool for analyzing a publicly
available cancer dataset. It does NOT provide medical diagnoses, treatment
recommendations, or replace professional medical advice. All outputs are
for research and educational purposes only.
"""

__version__ = "0.1.0"
