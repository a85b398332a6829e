import logging
import os
import posixpath
import tempfile
from urllib.parse import urlparse

from mlflow_client.entities.run_info import check_run_is_active
from mlflow_client.exceptions import (
    INVALID_PARAMETER_VALUE,
    RESOURCE_DOES_NOT_EXIST,
    MlflowException,
)
from mlflow_client.utils.rest_utils import (
    _ARTIFACTS_PROXY_PATH_PREFIX,
    http_request,
    raise_for_status,
    verify_rest_response,
)
from mlflow_client.utils.validation import bad_path_message, path_not_unique

_logger = logging.getLogger(__name__)

_PROXY_ARTIFACT_SCHEME = "mlflow-artifacts"
_DOWNLOAD_CHUNK_SIZE = 1024 * 1024


def verify_artifact_path(artifact_path):
    if artifact_path and path_not_unique(artifact_path):
        raise MlflowException(
            f"Invalid artifact path: '{artifact_path}'. {bad_path_message(artifact_path)}",
            error_code=INVALID_PARAMETER_VALUE,
        )


def _proxied_root_path(run_info):
    """
    Path of the run's artifact root below the tracking server's artifact proxy.
    """
    parsed = urlparse(run_info.artifact_uri or "")
    if parsed.scheme == _PROXY_ARTIFACT_SCHEME and parsed.path:
        return parsed.path.strip("/")
    return f"{run_info.experiment_id}/{run_info.run_id}/artifacts"


class RunArtifactRepository:
    """
    Uploads (logs) and downloads the artifacts of one run through the tracking server's
    artifact proxy (``/api/2.0/mlflow-artifacts/artifacts``). Listing goes through the tracking
    API (``artifacts/list``).

    :param run_info: :py:class:`mlflow_client.entities.RunInfo` of the run.
    :param store: :py:class:`mlflow_client.store.rest_store.RestStore` used for listing.
    """

    def __init__(self, run_info, store):
        self.run_info = run_info
        self.store = store
        self.root_path = _proxied_root_path(run_info)

    def _endpoint(self, artifact_path):
        return posixpath.join(_ARTIFACTS_PROXY_PATH_PREFIX, self.root_path, artifact_path)

    def log_artifact(self, local_file, artifact_path=None):
        """
        Log a local file as an artifact, optionally taking an ``artifact_path`` to place it in
        within the run's artifacts. Run artifacts can be organized into directories, so you can
        place the artifact in a directory this way.

        :param local_file: Path to artifact to log
        :param artifact_path: Directory within the run's artifact directory in which to log the
                              artifact.
        """
        check_run_is_active(self.run_info)
        verify_artifact_path(artifact_path)
        if not os.path.isfile(local_file):
            raise MlflowException(
                f"Artifact file does not exist or is not a file: {local_file}",
                error_code=RESOURCE_DOES_NOT_EXIST,
            )
        file_name = os.path.basename(local_file)
        paths = (artifact_path, file_name) if artifact_path else (file_name,)
        endpoint = self._endpoint(posixpath.join(*paths))
        _logger.debug("Uploading %s to %s", local_file, endpoint)
        with open(local_file, "rb") as f:
            response = http_request(self.store.get_host_creds(), endpoint, "PUT", data=f)
        verify_rest_response(response, endpoint)

    def log_artifacts(self, local_dir, artifact_path=None):
        """
        Log the files in the specified local directory as artifacts, optionally taking
        an ``artifact_path`` to place them in within the run's artifacts.

        :param local_dir: Directory of local artifacts to log
        :param artifact_path: Directory within the run's artifact directory in which to log the
                              artifacts
        """
        verify_artifact_path(artifact_path)
        local_dir = os.path.abspath(local_dir)
        for root, _, filenames in os.walk(local_dir):
            rel_dir = os.path.relpath(root, local_dir)
            upload_path = artifact_path
            if rel_dir != os.curdir:
                rel_dir = rel_dir.replace(os.sep, "/")
                upload_path = posixpath.join(artifact_path, rel_dir) if artifact_path else rel_dir
            for filename in filenames:
                self.log_artifact(os.path.join(root, filename), upload_path)

    def list_artifacts(self, path=None):
        """
        Return all the artifacts for this run directly under path. If path is a file, returns
        an empty list.

        :param path: Relative source path that contains desired artifacts

        :return: List of artifacts as FileInfo listed directly under path.
        """
        file_infos = []
        page_token = None
        while True:
            page = self.store.list_artifacts(self.run_info.run_id, path, page_token)
            file_infos.extend(page)
            page_token = page.token
            if not page_token:
                return file_infos

    def download_artifacts(self, artifact_path, dst_path=None):
        """
        Download an artifact file or directory to a local directory, and return a local path
        for it. The caller is responsible for managing the lifecycle of the downloaded
        artifacts.

        :param artifact_path: Relative source path to the desired artifacts.
        :param dst_path: Absolute path of the local filesystem destination directory to which to
                         download the specified artifacts. This directory must already exist.
                         If unspecified, the artifacts will be downloaded to a new
                         uniquely-named directory on the local filesystem.

        :return: Absolute path of the local filesystem location containing the desired artifacts.
        """

        def download_artifacts_into(artifact_path, dest_dir):
            basename = posixpath.basename(artifact_path)
            local_path = os.path.join(dest_dir, basename)
            listing = self.list_artifacts(artifact_path)
            if len(listing) > 0:
                # Artifact_path is a directory, so make a directory for it and download everything
                if not os.path.exists(local_path):
                    os.mkdir(local_path)
                for file_info in listing:
                    # prevent an infinite loop (sometimes the current path is listed e.g. as ".")
                    if file_info.path == "." or file_info.path == artifact_path:
                        continue
                    download_artifacts_into(artifact_path=file_info.path, dest_dir=local_path)
            else:
                self._download_file(remote_file_path=artifact_path, local_path=local_path)
            return local_path

        verify_artifact_path(artifact_path)
        if dst_path is None:
            dst_path = tempfile.mkdtemp()
        dst_path = os.path.abspath(dst_path)

        if not os.path.exists(dst_path):
            raise MlflowException(
                message=(
                    "The destination path for downloaded artifacts does not"
                    f" exist! Destination path: {dst_path}"
                ),
                error_code=RESOURCE_DOES_NOT_EXIST,
            )
        elif not os.path.isdir(dst_path):
            raise MlflowException(
                message=(
                    "The destination path for downloaded artifacts must be a directory!"
                    f" Destination path: {dst_path}"
                ),
                error_code=INVALID_PARAMETER_VALUE,
            )

        return download_artifacts_into(artifact_path, dst_path)

    def _download_file(self, remote_file_path, local_path):
        """
        Download the file at the specified relative remote path and saves
        it at the specified local path.

        :param remote_file_path: Source path to the remote file, relative to the root
                                 directory of the artifact repository.
        :param local_path: The path to which to save the downloaded file.
        """
        endpoint = self._endpoint(remote_file_path)
        _logger.debug("Downloading %s to %s", endpoint, local_path)
        response = http_request(self.store.get_host_creds(), endpoint, "GET", stream=True)
        try:
            raise_for_status(response, endpoint)
            with open(local_path, "wb") as f:
                for chunk in response.iter_content(chunk_size=_DOWNLOAD_CHUNK_SIZE):
                    f.write(chunk)
        finally:
            response.close()
