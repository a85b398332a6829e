from mlflow_client.entities._mlflow_object import _MlflowObject
from mlflow_client.utils.validation import _validate_required_fields


class FileInfo(_MlflowObject):
    """
    Metadata about a file or directory.
    """

    def __init__(self, path, is_dir, file_size):
        self._path = path
        self._is_dir = is_dir
        self._bytes = file_size

    def __eq__(self, other):
        if type(other) is type(self):
            return self.__dict__ == other.__dict__
        return False

    @property
    def path(self):
        """String path of the file or directory."""
        return self._path

    @property
    def is_dir(self):
        """Whether the FileInfo corresponds to a directory."""
        return self._is_dir

    @property
    def file_size(self):
        """Size of the file or directory. If the FileInfo is a directory, returns None."""
        return self._bytes

    def to_dictionary(self):
        file_info = {"path": self.path, "is_dir": self.is_dir}
        if self.file_size is not None:
            file_info["file_size"] = self.file_size
        return file_info

    @classmethod
    def from_dictionary(cls, file_info_dict):
        _validate_required_fields(file_info_dict, ["path"], "file info")
        is_dir = bool(file_info_dict.get("is_dir", False))
        file_size = file_info_dict.get("file_size")
        return cls(
            file_info_dict["path"],
            is_dir,
            None if is_dir or file_size is None else int(file_size),
        )
