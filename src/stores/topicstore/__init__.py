# Topic store providers package
from src.stores.topicstore.TopicStoreEnums import TopicStoreTypeEnum
from src.stores.topicstore.TopicStoreInterface import TopicStoreInterface
from src.stores.topicstore.TopicStoreProviderFactory import TopicStoreProviderFactory

__all__ = [
    "TopicStoreTypeEnum",
    "TopicStoreInterface",
    "TopicStoreProviderFactory",
]
