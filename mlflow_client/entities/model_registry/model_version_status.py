from enum import Enum


class ModelVersionStatus(str, Enum):
    """Registration status of a model version."""

    PENDING_REGISTRATION = "PENDING_REGISTRATION"
    FAILED_REGISTRATION = "FAILED_REGISTRATION"
    READY = "READY"

    @property
    def is_ready(self):
        return self is ModelVersionStatus.READY

    @property
    def is_pending(self):
        return self is ModelVersionStatus.PENDING_REGISTRATION

    @property
    def is_failed(self):
        return self is ModelVersionStatus.FAILED_REGISTRATION
