"""
Logistic regression fitted by batch gradient descent (numpy).

Weights and bias start at zero. Each epoch computes predictions for all
examples, takes the mean gradient of the logistic error, and steps against it.
Every `early_exit_check_interval` epochs the mean log-likelihood is checked and
training stops once it is above `early_exit_log_likelihood`.
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from curation.models.config import CurationConfig, DEFAULT_CONFIG
from curation.utils.scores import SIGMOID_INPUT_LIMIT, sigmoid

logger = logging.getLogger(__name__)

_LOG_EPSILON = 1e-15


def _sigmoid_array(z: np.ndarray) -> np.ndarray:
    z = np.clip(z, -SIGMOID_INPUT_LIMIT, SIGMOID_INPUT_LIMIT)
    return 1.0 / (1.0 + np.exp(-z))


def log_likelihood(predictions: np.ndarray, labels: np.ndarray) -> float:
    """Summed Bernoulli log-likelihood (<= 0; closer to 0 is a better fit)."""
    return float(
        np.sum(
            labels * np.log(predictions + _LOG_EPSILON)
            + (1 - labels) * np.log(1 - predictions + _LOG_EPSILON)
        )
    )


def fit_logistic_regression(
    features: Sequence[Sequence[float]],
    labels: Sequence[int],
    config: CurationConfig = DEFAULT_CONFIG,
) -> Tuple[List[float], float]:
    """
    Fit weights and bias for P(label=1 | x) = sigmoid(bias + w . x).

    Returns (weights, bias) as plain Python floats.
    """
    X = np.asarray(features, dtype=float)
    y = np.asarray(labels, dtype=float)
    if X.ndim != 2 or X.shape[0] == 0:
        raise ValueError("training needs a non-empty 2-D feature matrix")
    if X.shape[0] != y.shape[0]:
        raise ValueError(f"{X.shape[0]} feature rows but {y.shape[0]} labels")

    n, num_features = X.shape
    weights = np.zeros(num_features)
    bias = 0.0
    lr = config.learning_rate
    interval = config.early_exit_check_interval

    epoch = 0
    for epoch in range(config.epochs):
        predictions = _sigmoid_array(X @ weights + bias)
        errors = predictions - y
        mean_ll = log_likelihood(predictions, y) / n

        weights -= lr * (X.T @ errors) / n
        bias -= lr * float(np.mean(errors))

        if interval > 0 and epoch > 0 and epoch % interval == 0 and mean_ll > config.early_exit_log_likelihood:
            logger.info("[training] EARLY_EXIT epoch=%s mean_log_likelihood=%.4f", epoch, mean_ll)
            break

    logger.info("[training] FIT_DONE examples=%s epochs=%s", n, epoch + 1)
    return [float(w) for w in weights], float(bias)


def predict_probability(weights: Sequence[float], bias: float, features: Sequence[float]) -> float:
    """sigmoid(bias + sum(w_i * x_i)) with the input clamped to [-20, 20]."""
    z = bias + sum(w * x for w, x in zip(weights, features))
    return sigmoid(z)
