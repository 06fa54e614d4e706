class NotFoundError(Exception):
    """A requested entity does not exist in the store."""

    entity: str = "entity"

    def __init__(self, entity_id):
        self.entity_id = entity_id
        super().__init__(f"{self.entity.capitalize()} {entity_id} not found")


class UserNotFoundError(NotFoundError):
    entity = "user"


class ProjectNotFoundError(NotFoundError):
    entity = "project"
