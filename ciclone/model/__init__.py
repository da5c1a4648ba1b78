from .context import BuildContext, CloneConfig, NetrcCredentials

__all__ = ["BuildContext", "CloneConfig", "NetrcCredentials"]
