"""Enums for topic store providers"""
from enum import Enum


class TopicStoreTypeEnum(str, Enum):
    """Supported topic store backends"""
    SQL = "SQL"
    MEMORY = "MEMORY"
