"""Error taxonomy for the knowledge base service"""


class KnowledgeBaseError(Exception):
    """Base class for all knowledge base errors"""


class InvalidArgumentError(KnowledgeBaseError):
    """A required argument is missing or malformed"""


class InvalidTopicDataError(InvalidArgumentError):
    """Topic name or content is empty"""


class NotFoundError(KnowledgeBaseError):
    """No current record exists for the requested id"""

    def __init__(self, topic_id: str, message: str | None = None):
        self.topic_id = topic_id
        super().__init__(message or f"Topic with id {topic_id} not found")


class TopicNotFoundError(NotFoundError):
    """Topic lookup by id failed in a business operation"""


class DuplicateIdError(KnowledgeBaseError):
    """A topic with the same id already exists"""

    def __init__(self, topic_id: str):
        self.topic_id = topic_id
        super().__init__(f"Topic with id {topic_id} already exists")


class StorageError(KnowledgeBaseError):
    """Persistence layer failure (I/O, transaction, constraint)"""


class VersionConflictError(StorageError):
    """The current record changed between read and write of an update"""

    def __init__(self, topic_id: str, expected_version: int, actual_version: int):
        self.topic_id = topic_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Topic {topic_id} is at version {actual_version}, "
            f"update was based on version {expected_version}"
        )


class CyclicHierarchyError(KnowledgeBaseError):
    """Parent links form a cycle reachable from the hierarchy root"""

    def __init__(self, topic_id: str, root_id: str):
        self.topic_id = topic_id
        self.root_id = root_id
        super().__init__(
            f"Cycle detected in hierarchy of topic {root_id}: "
            f"topic {topic_id} is reached more than once"
        )
