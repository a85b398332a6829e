"""
Run, experiment and trace tags in the ``mlflow.`` namespace.

Tags whose key starts with :py:data:`MLFLOW_SYSTEM_TAG_PREFIX` are system tags; every other tag
is a user tag.
"""

MLFLOW_SYSTEM_TAG_PREFIX = "mlflow."

MLFLOW_RUN_NAME = "mlflow.runName"
MLFLOW_RUN_NOTE = "mlflow.note.content"
MLFLOW_PARENT_RUN_ID = "mlflow.parentRunId"
MLFLOW_USER = "mlflow.user"
MLFLOW_SOURCE_TYPE = "mlflow.source.type"
MLFLOW_SOURCE_NAME = "mlflow.source.name"
MLFLOW_ARTIFACT_LOCATION = "mlflow.artifactLocation"
MLFLOW_TRACE_NAME = "mlflow.traceName"


def is_system_tag(key):
    return key.startswith(MLFLOW_SYSTEM_TAG_PREFIX)
