import pytest

from src.stores.topicstore.TopicStoreProviderFactory import TopicStoreProviderFactory
from src.stores.topicstore.providers.InMemoryTopicStoreProvider import InMemoryTopicStoreProvider
from src.stores.topicstore.providers.SQLTopicStoreProvider import SQLTopicStoreProvider
from src.utils.config import Config


def test_creates_memory_provider():
    factory = TopicStoreProviderFactory(Config(topic_store_type="memory"))
    assert isinstance(factory.create("memory"), InMemoryTopicStoreProvider)


def test_creates_sql_provider(sql_config):
    factory = TopicStoreProviderFactory(sql_config)
    assert isinstance(factory.create("sql"), SQLTopicStoreProvider)


def test_sql_provider_requires_database_url():
    factory = TopicStoreProviderFactory(Config(topic_store_type="sql", database_url=""))
    with pytest.raises(ValueError):
        factory.create("SQL")


def test_unknown_provider_is_rejected():
    factory = TopicStoreProviderFactory(Config())
    with pytest.raises(ValueError, match="Unsupported topic store provider"):
        factory.create("redis")


@pytest.mark.parametrize("origins,expected", [
    ("*", ["*"]),
    ("", ["*"]),
    ("http://a.example, http://b.example,", ["http://a.example", "http://b.example"]),
])
def test_cors_origins(origins, expected):
    assert Config(cors_origins=origins).get_cors_origins() == expected
