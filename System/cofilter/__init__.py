from .dataset import Dataset
from .scores import CategoryScore, FeatureScore
from .metrics import (
    SimilarityMetric,
    EuclideanDistance,
    PearsonCorrelation,
    TanimotoCoefficient,
    FunctionMetric,
    get_metric
)
from .recommendations import Recommender, NoPredictionError
from .dataloading import DatasetLoader
