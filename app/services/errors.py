"""Error types raised by the survey workspace services.

Data layer failures are not wrapped: SQLAlchemy exceptions propagate to the
caller unchanged.
"""


class ResourceNotFoundError(Exception):
    """Raised when a looked-up resource does not exist.

    Attributes:
        resource: Entity type (e.g., "Survey")
        resource_id: Identifier that was looked up
    """

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} with ID {resource_id} not found")
