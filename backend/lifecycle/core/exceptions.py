class LifecycleError(Exception):
    """Base exception for the project lifecycle engine."""

    pass


class InvalidSnapshotError(LifecycleError):
    """Raised when a payload cannot be read as a project snapshot or change set."""

    def __init__(self, what: str, detail: str):
        self.what = what
        self.detail = detail
        super().__init__(f"Invalid {what}: {detail}")


class MutationRejectedError(LifecycleError):
    """Raised on request when an evaluated update contains rejected fields."""

    def __init__(self, project_id, rejections: list):
        self.project_id = project_id
        self.rejections = rejections
        fields = ", ".join(str(getattr(d, "field_name", d)) for d in rejections)
        super().__init__(f"Update to project {project_id} rejected for field(s): {fields}")
