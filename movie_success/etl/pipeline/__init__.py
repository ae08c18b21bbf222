"""Movie scoring pipeline: stages and orchestration."""

from movie_success.etl.pipeline.orchestrator import (
    PipelineResult,
    build_feature_table,
    run_pipeline,
    run_transforms,
    variant_path,
)

__all__ = [
    "PipelineResult",
    "build_feature_table",
    "run_pipeline",
    "run_transforms",
    "variant_path",
]
