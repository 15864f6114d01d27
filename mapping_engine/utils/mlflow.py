"""MLflow tracing for calls to the remote similarity service."""

from typing import Optional

import mlflow

from mapping_engine.config import MLflowConfig, get_config

# Track if autolog has been initialized
_autolog_initialized = False


def setup_mlflow_tracing(
    experiment_name: Optional[str] = None,
    mlflow_config: Optional[MLflowConfig] = None,
    enabled: Optional[bool] = None,
) -> bool:
    """
    Set up MLflow tracing of OpenAI SDK calls.

    Safe to call more than once; autolog is only switched on the first time.

    Args:
        experiment_name: Name of the MLflow experiment. If None, uses the config's experiment.
        mlflow_config: MLflow settings (defaults to the global config)
        enabled: Explicit on/off decision; if None, follows ``mlflow_config.enabled``

    Returns:
        True if tracing is active
    """
    global _autolog_initialized

    mlflow_config = mlflow_config or get_config().mlflow
    if enabled is None:
        enabled = mlflow_config.enabled

    if not enabled:
        return False

    if mlflow_config.tracking_uri:
        mlflow.set_tracking_uri(mlflow_config.tracking_uri)

    mlflow.set_experiment(experiment_name or mlflow_config.experiment_name)

    if not _autolog_initialized:
        mlflow.openai.autolog()
        _autolog_initialized = True

    return True
