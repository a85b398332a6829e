from mlflow_client.store.entities.paged_list import PagedList

__all__ = ["PagedList"]
