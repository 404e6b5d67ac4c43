from cancer_cv.analysis.explorer import DataExplorer

__all__ = ["DataExplorer"]
