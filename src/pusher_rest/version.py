"""Version information for the Pusher REST Python SDK"""

__version__ = "0.1.0"
