# Knowledge base schemas package

from .topic import Topic
from .topic_version import TopicVersion

__all__ = ["Topic", "TopicVersion"]
