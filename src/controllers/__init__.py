# Controllers package

from src.controllers.BaseController import BaseController
from src.controllers.TopicController import TopicController

__all__ = [
    "BaseController",
    "TopicController",
]
