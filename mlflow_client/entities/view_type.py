class ViewType:
    """Enum to filter requested experiment and run types."""

    ACTIVE_ONLY = "ACTIVE_ONLY"
    DELETED_ONLY = "DELETED_ONLY"
    ALL = "ALL"

    _VIEW_TO_STRING = {
        ACTIVE_ONLY: "active_only",
        DELETED_ONLY: "deleted_only",
        ALL: "all",
    }
    _STRING_TO_VIEW = {value: key for key, value in _VIEW_TO_STRING.items()}

    @staticmethod
    def from_string(view_str):
        if view_str not in ViewType._STRING_TO_VIEW:
            raise Exception(
                f"Could not get valid view type corresponding to string {view_str}. "
                f"Valid view types are {list(ViewType._STRING_TO_VIEW.keys())}"
            )
        return ViewType._STRING_TO_VIEW[view_str]

    @staticmethod
    def to_string(view_type):
        if view_type not in ViewType._VIEW_TO_STRING:
            raise Exception(
                f"Could not get valid view type corresponding to string {view_type}. "
                f"Valid view types are {list(ViewType._VIEW_TO_STRING.keys())}"
            )
        return ViewType._VIEW_TO_STRING[view_type]
