import random
import uuid

from mlflow_client.utils.time import get_current_time_millis


def random_int(lo=1, hi=1e10):
    return random.randint(lo, int(hi))


def random_str(size=10):
    msg = (
        "UUID4 generated strings have a high potential for collision at small sizes. "
        "10 is set as the lower bounds for random string generation to prevent non-deterministic "
        "test failures."
    )
    assert size >= 10, msg
    return uuid.uuid4().hex[:size]


def run_json(run_id="run-1", experiment_id="1", metrics=(), params=(), tags=(), **info):
    """JSON shape of a run as returned by ``runs/get`` and ``runs/create``."""
    run_info = {
        "run_id": run_id,
        "run_uuid": run_id,
        "experiment_id": experiment_id,
        "user_id": "user",
        "status": "RUNNING",
        "start_time": get_current_time_millis(),
        "lifecycle_stage": "active",
        "artifact_uri": f"mlflow-artifacts:/{experiment_id}/{run_id}/artifacts",
    }
    run_info.update(info)
    return {
        "info": run_info,
        "data": {"metrics": list(metrics), "params": list(params), "tags": list(tags)},
    }


def experiment_json(experiment_id="1", name="Default", tags=()):
    return {
        "experiment_id": experiment_id,
        "name": name,
        "artifact_location": f"mlflow-artifacts:/{experiment_id}",
        "lifecycle_stage": "active",
        "tags": list(tags),
    }
