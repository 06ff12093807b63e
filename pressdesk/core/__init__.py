"""
PressDesk Core
==============

Core utilities shared by the PressDesk admin screens.
"""

from .config import Config, get_config_value
from .api_client import BackendClient
from .logging_service import LoggingService, db_log, logger
from .notifications import Notifier, FlashNotifier

__all__ = ['Config', 'get_config_value', 'BackendClient', 'LoggingService', 'db_log',
           'logger', 'Notifier', 'FlashNotifier']
