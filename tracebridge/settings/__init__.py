from tracebridge.settings._protocol import ConfigProtocol
from tracebridge.settings.config import BridgeConfig
from tracebridge.settings.config import config


__all__ = ["BridgeConfig", "ConfigProtocol", "config"]
