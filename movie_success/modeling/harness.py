"""Logistic regression harness over the feature table.

Fits one binomial model per outcome label and cast-score variant, with
the primary genre as a categorical term and director and cast quality as
numeric terms, then evaluates it on a seeded random hold-out split.

Genre dummies are built over the whole table before splitting, so a
genre that only appears in the test split is still a known level (its
coefficient is then fitted on zero training rows).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Final

import numpy as np
import polars as pl
from sklearn.linear_model import LogisticRegression
from sklearn.metrics import (
    accuracy_score,
    confusion_matrix,
    f1_score,
    precision_score,
    recall_score,
    roc_auc_score,
)
from sklearn.model_selection import train_test_split
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler

from movie_success.etl import schemas
from movie_success.settings import ModelingSettings, settings

logger = logging.getLogger(__name__)

CAST_FEATURES: Final[tuple[str, ...]] = (schemas.CAST_SCORE, schemas.CAST_SCORE2)
MIN_CLASS_ROWS: Final[int] = 2


@dataclass
class ModelReport:
    """Evaluation of one fitted model.

    Attributes:
        outcome: Label column the model predicts.
        cast_feature: Cast score variant used as a feature.
        n_train: Training rows.
        n_test: Hold-out rows.
        confusion: 2x2 confusion matrix, rows = truth, columns = prediction,
            negative class first.
        accuracy: Hold-out accuracy.
        precision: Hold-out precision of the positive class.
        recall: Hold-out recall of the positive class.
        f1: Hold-out F1 of the positive class.
        roc_auc: Hold-out ROC AUC, None when the hold-out has one class.
        coefficients: Fitted coefficient per (standardized) feature.
    """

    outcome: str
    cast_feature: str
    n_train: int
    n_test: int
    confusion: list[list[int]]
    accuracy: float
    precision: float
    recall: float
    f1: float
    roc_auc: float | None
    coefficients: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert report to a JSON-friendly dictionary."""
        return {
            "outcome": self.outcome,
            "cast_feature": self.cast_feature,
            "n_train": self.n_train,
            "n_test": self.n_test,
            "confusion": self.confusion,
            "accuracy": round(self.accuracy, 4),
            "precision": round(self.precision, 4),
            "recall": round(self.recall, 4),
            "f1": round(self.f1, 4),
            "roc_auc": None if self.roc_auc is None else round(self.roc_auc, 4),
            "coefficients": {k: round(v, 4) for k, v in self.coefficients.items()},
        }

    def log_summary(self) -> None:
        """Log the headline metrics."""
        logger.info(
            "Model %s ~ genre + director_quality + %s: "
            "acc=%.3f prec=%.3f rec=%.3f f1=%.3f auc=%s (train=%d, test=%d)",
            self.outcome,
            self.cast_feature,
            self.accuracy,
            self.precision,
            self.recall,
            self.f1,
            "n/a" if self.roc_auc is None else f"{self.roc_auc:.3f}",
            self.n_train,
            self.n_test,
        )


class ModelingHarness:
    """Fits and evaluates the success models.

    Attributes:
        test_fraction: Share of rows held out.
        random_seed: Split seed.
        max_iter: Solver iteration cap.
    """

    def __init__(self, config: ModelingSettings | None = None) -> None:
        """Initialize harness.

        Args:
            config: Modeling configuration (default: global settings).
        """
        config = config or settings.modeling
        self.test_fraction = config.test_fraction
        self.random_seed = config.random_seed
        self.max_iter = config.max_iter

    # =========================================================================
    # Public API
    # =========================================================================

    def design_matrix(
        self,
        features: pl.DataFrame,
        outcome: str,
        cast_feature: str,
    ) -> tuple[np.ndarray, np.ndarray, list[str]]:
        """Build X, y and the feature names for one model.

        Rows with a null outcome, genre, director quality or cast score are
        excluded.

        Raises:
            MissingColumnError: If a feature column is absent.
        """
        numeric = [schemas.DIRECTOR_QUALITY, cast_feature]
        schemas.require_columns(
            features, [outcome, schemas.PRIMARY_GENRE, *numeric], "modeling harness"
        )

        frame = features.drop_nulls(subset=[outcome, schemas.PRIMARY_GENRE, *numeric])
        dummies = frame.select(schemas.PRIMARY_GENRE).to_dummies(drop_first=True)
        design = frame.select(numeric)
        if dummies.width:
            design = pl.concat([design, dummies], how="horizontal")

        X = design.cast(pl.Float64).to_numpy()
        y = frame.get_column(outcome).cast(pl.Int64).to_numpy()
        return X, y, design.columns

    def fit(self, features: pl.DataFrame, outcome: str, cast_feature: str) -> ModelReport:
        """Fit and evaluate one model.

        Raises:
            ValueError: If either class has fewer than two rows.
        """
        X, y, names = self.design_matrix(features, outcome, cast_feature)

        positives = int(y.sum())
        if min(positives, len(y) - positives) < MIN_CLASS_ROWS:
            raise ValueError(
                f"{outcome}: needs at least {MIN_CLASS_ROWS} rows per class, "
                f"got {positives} positive / {len(y) - positives} negative"
            )

        X_train, X_test, y_train, y_test = train_test_split(
            X, y, test_size=self.test_fraction, random_state=self.random_seed
        )

        model = Pipeline(
            [
                ("scale", StandardScaler()),
                ("model", LogisticRegression(max_iter=self.max_iter)),
            ]
        )
        model.fit(X_train, y_train)

        predicted = model.predict(X_test)
        probabilities = model.predict_proba(X_test)[:, 1]

        report = ModelReport(
            outcome=outcome,
            cast_feature=cast_feature,
            n_train=len(y_train),
            n_test=len(y_test),
            confusion=confusion_matrix(y_test, predicted, labels=[0, 1]).tolist(),
            accuracy=float(accuracy_score(y_test, predicted)),
            precision=float(precision_score(y_test, predicted, zero_division=0)),
            recall=float(recall_score(y_test, predicted, zero_division=0)),
            f1=float(f1_score(y_test, predicted, zero_division=0)),
            roc_auc=self._roc_auc(y_test, probabilities),
            coefficients=dict(
                zip(names, model.named_steps["model"].coef_[0].tolist(), strict=True)
            ),
        )
        report.log_summary()
        return report

    def fit_all(self, features: pl.DataFrame) -> list[ModelReport]:
        """Fit every outcome x cast variant combination.

        Combinations whose data has a degenerate class balance are skipped
        with a warning.
        """
        reports: list[ModelReport] = []
        for outcome in schemas.OUTCOME_COLUMNS:
            for cast_feature in CAST_FEATURES:
                try:
                    reports.append(self.fit(features, outcome, cast_feature))
                except ValueError as e:
                    logger.warning("Skipping model: %s", e)
        return reports

    # =========================================================================
    # Internal Methods
    # =========================================================================

    @staticmethod
    def _roc_auc(y_true: np.ndarray, scores: np.ndarray) -> float | None:
        """ROC AUC, or None when the hold-out contains a single class."""
        if len(np.unique(y_true)) < 2:
            return None
        return float(roc_auc_score(y_true, scores))
