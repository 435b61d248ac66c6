"""Factory for creating topic store providers"""
from src.stores.topicstore.TopicStoreEnums import TopicStoreTypeEnum
from src.stores.topicstore.TopicStoreInterface import TopicStoreInterface
from src.stores.topicstore.providers.InMemoryTopicStoreProvider import InMemoryTopicStoreProvider
from src.stores.topicstore.providers.SQLTopicStoreProvider import SQLTopicStoreProvider
from src.utils.config import Config
from src.utils.logger import get_logger

logger = get_logger(__name__)


class TopicStoreProviderFactory:
    """Factory for creating topic store providers"""

    def __init__(self, config: Config):
        """
        Initialize factory with configuration.

        Args:
            config: Application configuration object
        """
        self.config = config

    def create(self, provider: str) -> TopicStoreInterface:
        """
        Create topic store provider instance.

        Args:
            provider: Provider name ("SQL", "MEMORY")

        Returns:
            TopicStoreInterface instance

        Raises:
            ValueError: Unsupported provider or missing configuration
        """
        provider_upper = provider.upper()

        if provider_upper == TopicStoreTypeEnum.SQL.value:
            provider_instance = SQLTopicStoreProvider(self.config)
            logger.info("Created SQL topic store provider")
            return provider_instance

        if provider_upper == TopicStoreTypeEnum.MEMORY.value:
            logger.warning(
                "Created in-memory topic store provider. "
                "Topics will not survive a restart."
            )
            return InMemoryTopicStoreProvider()

        supported = ", ".join(member.value for member in TopicStoreTypeEnum)
        raise ValueError(f"Unsupported topic store provider: {provider}. Supported providers: {supported}")
